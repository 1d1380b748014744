"""
userdb
======

Singleton-scoped embedded SQLite store with a minimal user repository.

Usage:
    from userdb.database import DatabaseHandle
    from userdb.models import User

    handle = DatabaseHandle.get()
    repo = handle.repository()
    repo.insert(User(name="Rute", email="rute@gmail.com"))
    for user in repo.get_all_users():
        print(user)
"""

__version__ = "0.1.0"
