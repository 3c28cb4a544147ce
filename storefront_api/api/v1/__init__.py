# ==============================================================================
# API V1 ENDPOINTS PACKAGE
# ==============================================================================

"""
API V1 Endpoints
================

Version 1 API endpoint implementations.
"""

from storefront_api.api.v1.auth import router as auth_router
from storefront_api.api.v1.products import router as products_router

__all__ = [
    "auth_router",
    "products_router",
]
