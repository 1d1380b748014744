"""
Configuration package.

Exports the singleton settings instance for easy importing.

Usage:
    from userdb.config import settings

    print(settings.database_path)
"""

from userdb.config.settings import Settings, settings, get_settings

__all__ = [
    "Settings",
    "settings",
    "get_settings",
]
