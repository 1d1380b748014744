"""
Application-wide constants.

Storage names and the schema version live here so the database layer,
the models and the CLI agree on them.
"""

# ========================================
# Storage
# ========================================

DATABASE_NAME = "user-database"
"""Fixed logical name of the embedded store file."""

USERS_TABLE = "users"

SCHEMA_VERSION = 1
"""Only supported schema version. There is no migration path."""

# ========================================
# Logging
# ========================================

USER_LINE_FORMAT = "{id}: {name} - {email}"
"""One line per retrieved record, e.g. '1: Rute - rute@gmail.com'."""

# ========================================
# Demo record
# ========================================

DEMO_USER_NAME = "Rute"
DEMO_USER_EMAIL = "rute@gmail.com"
