# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================

"""
Business Logic Layer
====================

- account_service: Account persistence
- auth_service: Registration, login, token verification
- product_service: Product CRUD
"""

from storefront_api.services.account_service import AccountService
from storefront_api.services.auth_service import AuthService
from storefront_api.services.product_service import ProductService

__all__ = [
    "AccountService",
    "AuthService",
    "ProductService",
]
