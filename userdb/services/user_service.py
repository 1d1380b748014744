"""
User Service
============

Dispatches blocking repository calls to a worker thread pool.

The repository stays synchronous; this service owns the threading
decision and hands results back as concurrent.futures.Future objects.
Storage errors raised on the worker are re-raised by Future.result().
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from userdb.config import settings
from userdb.models.user import User
from userdb.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """
    Background access to a UserRepository.

    Example:
        with UserService(handle.repository()) as service:
            users = service.insert_and_list_async(user).result()
    """

    def __init__(self, repository: UserRepository, max_workers: Optional[int] = None):
        """
        Args:
            repository: Repository the worker calls into
            max_workers: Worker thread count (default from settings)
        """
        self.repository = repository
        self.max_workers = max_workers if max_workers is not None else settings.worker_threads

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="userdb-worker"
        )

    def insert_async(self, record: User) -> "Future[int]":
        """Submit an insert; the future resolves to the row id."""
        return self._executor.submit(self.repository.insert, record)

    def get_all_users_async(self) -> "Future[List[User]]":
        """Submit a full table read."""
        return self._executor.submit(self.repository.get_all_users)

    def insert_and_list_async(self, record: User) -> "Future[List[User]]":
        """
        Insert a record and then read every row, as one background task.

        Both steps run on the same worker, so the read always observes
        the insert.
        """
        return self._executor.submit(self._insert_and_list, record)

    def _insert_and_list(self, record: User) -> List[User]:
        user_id = self.repository.insert(record)
        logger.debug("Background insert wrote id=%s", user_id)
        return self.repository.get_all_users()

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and optionally wait for pending tasks."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "UserService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


def get_user_service(repository: UserRepository) -> UserService:
    """
    Factory function for creating UserService.

    Usage:
        from userdb.database import DatabaseHandle
        from userdb.services import get_user_service

        service = get_user_service(DatabaseHandle.get().repository())
    """
    return UserService(repository)
