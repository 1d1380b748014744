"""
Data access layer (Repository pattern).

Repositories handle all database queries,
isolating callers from SQL.
"""

from userdb.repositories.user_repository import UserRepository, SqlAlchemyUserRepository

__all__ = [
    "UserRepository",
    "SqlAlchemyUserRepository",
]
