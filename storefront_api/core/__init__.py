# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Security, Exceptions, Constants
# ==============================================================================

"""
Core Module
===========

- settings: Environment configuration management
- security: Argon2id password hashing and JWT signing
- exceptions: Custom exception classes
- constants: Application-wide constants
"""

from storefront_api.core.settings import settings, get_settings, DatabaseType
from storefront_api.core.exceptions import (
    AppException,
    ConflictError,
    DatabaseError,
    InvalidTokenError,
    NotFoundError,
    TokenExpiredError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "settings",
    "get_settings",
    "DatabaseType",
    "AppException",
    "ConflictError",
    "DatabaseError",
    "InvalidTokenError",
    "NotFoundError",
    "TokenExpiredError",
    "UnauthorizedError",
    "ValidationError",
]
