# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

"""
API Module
==========

FastAPI routers and endpoint definitions:
- Dependencies: service assembly, bearer token resolution
- Routers: Authentication, Products
"""

from storefront_api.api.router import api_router

__all__ = ["api_router"]
