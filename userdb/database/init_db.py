"""
Database initialization and seeding.

This script:
- Creates the users table and stamps schema version 1
- Optionally adds sample users for development/testing
- Can reset the database (drop and recreate)

Usage:
    # Create the schema
    python -m userdb.database.init_db

    # Reset database (drops all tables and recreates)
    python -m userdb.database.init_db --reset

    # Add sample users
    python -m userdb.database.init_db --sample-data
"""

import argparse
import logging
from typing import List, Optional

from userdb.config import Settings, get_settings
from userdb.core.constants import DEMO_USER_EMAIL, DEMO_USER_NAME
from userdb.core.exceptions import StorageError
from userdb.database.session import DatabaseHandle, create_all_tables, drop_all_tables
from userdb.models import User

logger = logging.getLogger(__name__)


SAMPLE_USERS = [
    {"name": DEMO_USER_NAME, "email": DEMO_USER_EMAIL},
    {"name": "Ana", "email": "ana@example.com"},
    {"name": "Bruno", "email": "bruno@example.com"},
]


def create_tables(handle: DatabaseHandle, reset: bool = False) -> None:
    """
    Create all database tables.

    Args:
        handle: Open database handle
        reset: If True, drop existing tables first
    """
    if reset:
        logger.warning("Dropping existing tables")
        drop_all_tables(handle.engine)

    create_all_tables(handle.engine)
    logger.info("Tables ready (schema version %s)", handle.schema_version())


def seed_sample_data(handle: DatabaseHandle) -> List[int]:
    """
    Insert the sample users.

    Returns:
        Row ids of the inserted users
    """
    repo = handle.repository()
    ids = [repo.insert(User(**data)) for data in SAMPLE_USERS]
    logger.info("Seeded %d sample user(s)", len(ids))
    return ids


def print_database_status(handle: DatabaseHandle) -> int:
    """
    Log current database status.

    Returns:
        Number of rows in the users table
    """
    with handle.session_scope() as db:
        users_count = db.query(User).count()

    logger.info("Users: %d", users_count)
    for user in handle.repository().get_all_users():
        logger.info("  %s", user)
    return users_count


def initialize_database(
    reset: bool = False,
    sample_data: bool = False,
    settings: Optional[Settings] = None
) -> DatabaseHandle:
    """
    Initialize the database.

    Args:
        reset: Drop existing tables before creating
        sample_data: Add sample users for testing
        settings: Storage configuration (defaults to global settings)

    Returns:
        The shared handle
    """
    handle = DatabaseHandle.get(settings)

    create_tables(handle, reset=reset)

    if sample_data:
        seed_sample_data(handle)

    print_database_status(handle)
    return handle


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the user database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create the schema
  python -m userdb.database.init_db

  # Reset database (drop all tables and recreate)
  python -m userdb.database.init_db --reset

  # Full reset with sample users
  python -m userdb.database.init_db --reset --sample-data
        """
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add sample users for development/testing"
    )

    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # Confirm reset if requested
    if args.reset:
        response = input("This will DELETE ALL DATA in the database. Type 'yes' to continue: ")
        if response.lower() != "yes":
            logger.info("Aborted")
            return 1

    try:
        initialize_database(reset=args.reset, sample_data=args.sample_data, settings=settings)
    except StorageError as e:
        logger.error("Database initialization failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
