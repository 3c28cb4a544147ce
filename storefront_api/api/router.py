# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================
# Combines all API version routers
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from storefront_api.api.v1 import auth_router, products_router
from storefront_api.core.settings import settings

api_router = APIRouter()

# Include v1 routers with API prefix
api_router.include_router(auth_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(products_router, prefix=settings.API_V1_PREFIX)
