"""
Base Model
==========

Provides common functionality for all database models.
"""

from typing import Any, Dict, Optional
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class SerializationMixin:
    """Mixin that adds to_dict() serialization method."""

    def to_dict(self, exclude: Optional[set] = None) -> Dict[str, Any]:
        """Convert model instance to dictionary."""
        exclude = exclude or set()
        result = {}
        for column in self.__table__.columns:
            if column.name in exclude:
                continue
            result[column.name] = getattr(self, column.name)
        return result
