# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================

"""
Database Layer
==============

- base_store: Store contract over named collections
- sqlalchemy_store: SQLAlchemy async implementation (SQLite / PostgreSQL)
- query: Store-neutral query shape and the parameter translator
- factory: Store lifecycle management
"""

from storefront_api.database.base_store import BaseStore, Record
from storefront_api.database.factory import DatabaseFactory
from storefront_api.database.models import Account, Product, SQLBase
from storefront_api.database.query import (
    OPERATORS,
    Condition,
    Ordering,
    QueryTranslator,
    StoreQuery,
)
from storefront_api.database.sqlalchemy_store import SQLAlchemyStore

__all__ = [
    "BaseStore",
    "Record",
    "DatabaseFactory",
    "Account",
    "Product",
    "SQLBase",
    "OPERATORS",
    "Condition",
    "Ordering",
    "QueryTranslator",
    "StoreQuery",
    "SQLAlchemyStore",
]
