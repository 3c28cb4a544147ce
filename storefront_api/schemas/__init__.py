# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
Pydantic Schemas
================

Request/response models for accounts, authentication, products and
generic list queries.
"""

from storefront_api.schemas.base import (
    APIResponse,
    BaseSchema,
    HealthResponse,
    TimestampSchema,
)
from storefront_api.schemas.account import AccountInDB, AccountResponse, SignUp
from storefront_api.schemas.auth import JwtPayload, LoginRequest, TokenResponse
from storefront_api.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from storefront_api.schemas.query import QueryParams, SortOrder

__all__ = [
    "APIResponse",
    "BaseSchema",
    "HealthResponse",
    "TimestampSchema",
    "AccountInDB",
    "AccountResponse",
    "SignUp",
    "JwtPayload",
    "LoginRequest",
    "TokenResponse",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "QueryParams",
    "SortOrder",
]
