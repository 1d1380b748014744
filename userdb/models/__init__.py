"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from userdb.models.base import Base, SerializationMixin
from userdb.models.user import User

__all__ = [
    "Base",
    "SerializationMixin",
    "User",
]
