"""
User repository.

Exposes the two supported operations over the `users` table:

- insert(): INSERT OR REPLACE INTO users (...) VALUES (...)
- get_all_users(): SELECT * FROM users

Each call runs in its own short-lived session and transaction, so every
operation is a single atomic statement. Calls block on storage I/O; run
them off latency-sensitive threads (see userdb.services.user_service).
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from userdb.core.exceptions import StorageReadError, StorageWriteError
from userdb.models.user import User

__all__ = ["UserRepository", "SqlAlchemyUserRepository"]

logger = logging.getLogger(__name__)


class UserRepository(ABC):
    """Interface for user persistence."""

    @abstractmethod
    def insert(self, record: User) -> int:
        """
        Write a record, replacing any existing row with the same id.

        Args:
            record: User to persist. Left unmodified.

        Returns:
            The row id of the written record

        Raises:
            StorageWriteError: If the statement fails
        """

    @abstractmethod
    def get_all_users(self) -> List[User]:
        """
        Return every row of the users table.

        Order is implementation-defined (no ORDER BY); do not assume sorting.

        Raises:
            StorageReadError: If the query fails
        """


class SqlAlchemyUserRepository(UserRepository):
    """
    UserRepository backed by a SQLAlchemy session factory.

    Example:
        repo = SqlAlchemyUserRepository(SessionLocal)
        user_id = repo.insert(User(name="Rute", email="rute@gmail.com"))
        users = repo.get_all_users()
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """
        Args:
            session_factory: Callable returning a new Session, normally a
                sessionmaker with expire_on_commit=False so returned rows
                stay readable after the session closes
        """
        self._session_factory = session_factory

    @staticmethod
    def _values(record: User) -> Dict[str, Any]:
        values = {"name": record.name, "email": record.email}
        # None and 0 both mean unset; the engine assigns the id
        if record.id:
            values["id"] = record.id
        return values

    def insert(self, record: User) -> int:
        stmt = (
            insert(User.__table__)
            .prefix_with("OR REPLACE")
            .values(**self._values(record))
        )
        try:
            with self._session_factory() as session:
                with session.begin():
                    result = session.execute(stmt)
                    user_id = result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            logger.error("Insert into users failed: %s", e)
            raise StorageWriteError(f"Failed to insert user {record!r}: {e}") from e

        logger.debug("Inserted user id=%s", user_id)
        return user_id

    def get_all_users(self) -> List[User]:
        try:
            with self._session_factory() as session:
                users = list(session.scalars(select(User)).all())
                # Detach so callers own plain snapshots
                session.expunge_all()
        except SQLAlchemyError as e:
            logger.error("Select from users failed: %s", e)
            raise StorageReadError(f"Failed to read users: {e}") from e

        logger.debug("Read %d user(s)", len(users))
        return users
