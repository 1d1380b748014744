"""
User model.

A User is one row of the `users` table: an auto-assigned integer id plus a
required name and email. Emails are not unique; two users may share one.

Lifecycle:
- Built transiently by the caller with id unset (None or 0)
- Persisted through UserRepository.insert(), which assigns the id
- Read back as detached snapshots from UserRepository.get_all_users()
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from userdb.core.constants import USERS_TABLE, USER_LINE_FORMAT
from userdb.models.base import Base, SerializationMixin


class User(SerializationMixin, Base):
    """
    User record.

    Attributes:
        id: Primary key, assigned by the store on insert (None or 0 until then)
        name: Display name (required)
        email: Contact email (required, duplicates allowed)

    Example:
        user = User(name="Rute", email="rute@gmail.com")
        user.id  # None until inserted

        # Replace the row with id=1
        User(id=1, name="Ana", email="ana@example.com")
    """

    __tablename__ = USERS_TABLE
    __table_args__ = {"sqlite_autoincrement": True}

    # ========================================
    # Columns
    # ========================================

    id: Mapped[Optional[int]] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # ========================================
    # Validation
    # ========================================

    def __init__(self, **kwargs):
        """
        Initialize a User with validation.

        Raises:
            ValueError: If name or email is missing
        """
        super().__init__(**kwargs)

        if self.name is None:
            raise ValueError("User name is required")
        if self.email is None:
            raise ValueError("User email is required")

    def is_persisted(self) -> bool:
        """Check if the store has assigned an id to this record."""
        return bool(self.id)

    # ========================================
    # String Representation
    # ========================================

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"<User(id={self.id}, name='{self.name}', email='{self.email}')>"

    def __str__(self) -> str:
        """
        Log line for this record.

        Example output:
            "1: Rute - rute@gmail.com"
        """
        return USER_LINE_FORMAT.format(id=self.id, name=self.name, email=self.email)
