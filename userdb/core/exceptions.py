"""
Storage exception hierarchy.

Every error raised by the database layer is a subclass of StorageError,
chained to the underlying SQLAlchemy or OS error.
"""

__all__ = [
    "StorageError",
    "StorageInitError",
    "StorageWriteError",
    "StorageReadError",
]


class StorageError(Exception):
    """Root exception for all userdb storage errors."""


class StorageInitError(StorageError):
    """Raised when the store cannot be opened, created or has an unsupported schema."""


class StorageWriteError(StorageError):
    """Raised when an insert statement fails. The table is left unchanged."""


class StorageReadError(StorageError):
    """Raised when reading the users table fails."""
