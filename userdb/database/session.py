"""
Database Session Management
============================

Owns the single process-wide handle to the embedded store.

DatabaseHandle.get() builds the engine lazily on first use and reuses it
thereafter. Construction uses double-checked locking: an unlocked read of
the cached instance, then a lock-guarded re-check before building, so
concurrent first callers still create exactly one engine.
"""

import logging
import os
import threading
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from userdb.config import Settings, get_settings
from userdb.core.constants import SCHEMA_VERSION
from userdb.core.exceptions import StorageInitError
from userdb.repositories.user_repository import SqlAlchemyUserRepository, UserRepository

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create and configure the database engine."""
    url = make_url(database_url)

    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, echo=echo)

    db_path = url.database
    in_memory = not db_path or db_path == ":memory:"

    # Ensure data directory exists
    if not in_memory:
        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir, exist_ok=True)

    if in_memory:
        # One shared connection, otherwise each checkout sees an empty database
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo
        )
    else:
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo
        )

    # Enable foreign keys and WAL mode for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def create_all_tables(engine: Engine) -> None:
    """Create all tables and stamp the schema version."""
    from userdb.models.base import Base

    with engine.begin() as conn:
        version = conn.exec_driver_sql("PRAGMA user_version").scalar()
        if version not in (0, SCHEMA_VERSION):
            raise StorageInitError(
                f"Unsupported schema version {version} "
                f"(only version {SCHEMA_VERSION} is supported)"
            )
        Base.metadata.create_all(bind=conn)
        if version == 0:
            conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")


def drop_all_tables(engine: Engine) -> None:
    """Drop all tables and clear the schema version."""
    from userdb.models.base import Base

    with engine.begin() as conn:
        Base.metadata.drop_all(bind=conn)
        conn.exec_driver_sql("PRAGMA user_version = 0")


class DatabaseHandle:
    """
    Process-wide handle to the embedded user store.

    Attributes:
        engine: SQLAlchemy engine bound to the store
        SessionLocal: Session factory (expire_on_commit=False)

    Example:
        handle = DatabaseHandle.get()
        repo = handle.repository()
        repo.insert(User(name="Rute", email="rute@gmail.com"))
    """

    _instance: Optional["DatabaseHandle"] = None
    _lock = threading.Lock()

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(
            autoflush=False,
            expire_on_commit=False,
            bind=engine
        )
        self._repository = SqlAlchemyUserRepository(self.SessionLocal)

    # ========================================
    # Singleton Access
    # ========================================

    @classmethod
    def get(cls, settings: Optional[Settings] = None) -> "DatabaseHandle":
        """
        Return the process-wide handle, building it on first use.

        Args:
            settings: Configuration naming the storage location. Only
                consulted when the handle is built; defaults to the
                global settings.

        Returns:
            The shared DatabaseHandle

        Raises:
            StorageInitError: If the store cannot be opened or created.
                Nothing is cached, so a later call tries again.
        """
        instance = cls._instance
        if instance is None:
            with cls._lock:
                instance = cls._instance
                if instance is None:
                    instance = cls.open(settings or get_settings())
                    cls._instance = instance
        return instance

    @classmethod
    def open(cls, settings: Settings) -> "DatabaseHandle":
        """
        Build a new, non-shared handle.

        Prefer get(); this is the construction step it guards.

        Raises:
            StorageInitError: If the store cannot be opened or created
        """
        database_url = settings.resolved_database_url
        logger.info("Opening user store at %s", database_url)

        try:
            engine = create_db_engine(database_url, echo=settings.app_debug)
        except (OSError, SQLAlchemyError) as e:
            raise StorageInitError(f"Cannot create store at {database_url}: {e}") from e

        try:
            create_all_tables(engine)
        except StorageInitError:
            engine.dispose()
            raise
        except (OSError, SQLAlchemyError) as e:
            engine.dispose()
            raise StorageInitError(f"Cannot open store at {database_url}: {e}") from e

        return cls(engine)

    @classmethod
    def reset(cls) -> None:
        """Close and forget the shared handle. The next get() builds a new one."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.close()
                cls._instance = None

    # ========================================
    # Handle API
    # ========================================

    def repository(self) -> UserRepository:
        """Return the handle-scoped user repository."""
        return self._repository

    def schema_version(self) -> int:
        """Schema version stamped in the store."""
        with self.engine.connect() as conn:
            return conn.exec_driver_sql("PRAGMA user_version").scalar()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions.

        Usage:
            with handle.session_scope() as db:
                db.query(User).count()
        """
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def close(self) -> None:
        """Dispose of the engine and its connections."""
        self.engine.dispose()
        logger.debug("User store closed")
