"""
Demo entry point.

Opens the shared store, inserts one hard-coded user on a background
worker, reads every row back and logs one line per record:

    1: Rute - rute@gmail.com

Usage:
    python -m userdb.main
    userdb-demo
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from userdb.config import Settings, get_settings
from userdb.core.constants import DEMO_USER_EMAIL, DEMO_USER_NAME
from userdb.core.exceptions import StorageError
from userdb.database import DatabaseHandle
from userdb.models import User
from userdb.services import UserService

logger = logging.getLogger(__name__)


@dataclass
class DemoResult:
    """Outcome of run_demo(). Exactly one of users/error is meaningful."""

    users: List[User] = field(default_factory=list)
    error: Optional[StorageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def log_users(users: List[User]) -> None:
    """Emit one log line per record."""
    for user in users:
        logger.info("%s", user)


def run_demo(settings: Optional[Settings] = None) -> DemoResult:
    """
    Insert the demo user and list the table.

    Storage failures are returned in the result instead of being lost
    on the worker thread.
    """
    settings = settings or get_settings()
    try:
        handle = DatabaseHandle.get(settings)
    except StorageError as e:
        return DemoResult(error=e)

    new_user = User(name=DEMO_USER_NAME, email=DEMO_USER_EMAIL)

    with UserService(handle.repository(), max_workers=settings.worker_threads) as service:
        future = service.insert_and_list_async(new_user)
        try:
            users = future.result()
        except StorageError as e:
            return DemoResult(error=e)

    log_users(users)
    return DemoResult(users=users)


def main() -> int:
    """Main entry point. Returns the process exit code."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    result = run_demo(settings)
    if not result.ok:
        logger.error("Demo failed: %s", result.error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
