"""
Services Package
================

Application layer on top of the repositories.

Available services:
- UserService: runs repository calls on a background worker and returns futures
"""

from userdb.services.user_service import UserService, get_user_service

__all__ = [
    "UserService",
    "get_user_service",
]
