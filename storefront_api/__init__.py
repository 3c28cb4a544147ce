# ==============================================================================
# STOREFRONT API PACKAGE INITIALIZATION
# ==============================================================================
# Account authentication (JWT) and product catalog backend on FastAPI
# Architecture: Store abstraction, Query translation, Service layer
# ==============================================================================

"""
Storefront API
==============

A FastAPI backend exposing account registration/login with JWT bearer
tokens and a product catalog with paginated, ordered and filtered listing.

Features:
---------
- Argon2id password hashing
- Stateless HS256 JWT access tokens
- Store abstraction over async SQLAlchemy (SQLite, PostgreSQL)
- Store-neutral query translation (skip/take/order_by/where)

Usage:
------
    from storefront_api.main import app

    # Run with uvicorn
    uvicorn storefront_api.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
