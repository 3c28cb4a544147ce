# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# ==============================================================================

from __future__ import annotations

from typing import Final


class APIConstants:
    """API-related constants."""

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 20
    MAX_PAGE_SIZE: Final[int] = 100

    REQUEST_ID_HEADER: Final[str] = "X-Request-ID"


class DatabaseConstants:
    """Collection names shared by the store and the services."""

    ACCOUNTS_COLLECTION: Final[str] = "accounts"
    PRODUCTS_COLLECTION: Final[str] = "products"


class SecurityConstants:
    """Security-related constants."""

    MIN_PASSWORD_LENGTH: Final[int] = 8
    MAX_PASSWORD_LENGTH: Final[int] = 128


class ErrorMessages:
    """User-facing error messages."""

    # Same text for unknown email and wrong password
    INVALID_CREDENTIALS: Final[str] = "Invalid email or password"
    NOT_AUTHENTICATED: Final[str] = "Not authenticated"
    ACCOUNT_NOT_FOUND: Final[str] = "Account no longer exists"
    EMAIL_TAKEN: Final[str] = "Email already registered"
    PRODUCT_NOT_FOUND: Final[str] = "Product not found"
