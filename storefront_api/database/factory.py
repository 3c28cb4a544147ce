# ==============================================================================
# DATABASE FACTORY - Store Instantiation & Lifecycle Management
# ==============================================================================
# Factory Pattern for creating and managing the record store
# Singleton caching so every request shares one engine/pool
# ==============================================================================

from __future__ import annotations

import logging
from typing import Dict, Optional

from storefront_api.core.constants import DatabaseConstants
from storefront_api.core.exceptions import DatabaseError
from storefront_api.core.settings import DatabaseType, settings
from storefront_api.database.base_store import BaseStore
from storefront_api.database.models import Account, Product
from storefront_api.database.sqlalchemy_store import SQLAlchemyStore

logger = logging.getLogger(__name__)


class DatabaseFactory:
    """
    Factory class for creating and managing stores.

    Class Attributes:
        _instances: Cache of initialized stores keyed by database type

    Example:
        >>> # Initialize at application startup
        >>> await DatabaseFactory.initialize()
        >>>
        >>> store = DatabaseFactory.get_store()
        >>> product = await store.get_by_id("products", 1)
        >>>
        >>> # Shutdown at application exit
        >>> await DatabaseFactory.shutdown()
    """

    _instances: Dict[DatabaseType, BaseStore] = {}

    @classmethod
    def create_store(
        cls,
        db_type: Optional[DatabaseType] = None,
        database_url: Optional[str] = None,
    ) -> BaseStore:
        """
        Create the store for ``db_type``, or return the cached one.

        Args:
            db_type: Database type (defaults to settings.DATABASE_TYPE)
            database_url: Custom connection URL

        Raises:
            ValueError: If database type is not supported
        """
        db_type = db_type or settings.DATABASE_TYPE

        if db_type in cls._instances:
            return cls._instances[db_type]

        if db_type == DatabaseType.SQLITE:
            store = SQLAlchemyStore(database_url or settings.sqlite_async_url)
            logger.info("Created SQLite store")

        elif db_type == DatabaseType.POSTGRESQL:
            store = SQLAlchemyStore(database_url or settings.postgres_url)
            logger.info("Created PostgreSQL store")

        else:
            raise ValueError(f"Unsupported database type: {db_type}")

        cls._register_models(store)
        cls._instances[db_type] = store
        return store

    @classmethod
    async def initialize(
        cls,
        db_type: Optional[DatabaseType] = None,
        database_url: Optional[str] = None,
    ) -> BaseStore:
        """
        Create the store and connect it. Called at application startup.

        Raises:
            DatabaseError: If connection fails
        """
        store = cls.create_store(db_type, database_url)

        try:
            await store.connect()
            logger.info(f"Database initialized: {db_type or settings.DATABASE_TYPE}")
            return store
        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            cls._instances.pop(db_type or settings.DATABASE_TYPE, None)
            raise DatabaseError(f"Failed to initialize database: {e}")

    @staticmethod
    def _register_models(store: SQLAlchemyStore) -> None:
        """Bind collection names to their tables."""
        store.register_model(DatabaseConstants.ACCOUNTS_COLLECTION, Account)
        store.register_model(DatabaseConstants.PRODUCTS_COLLECTION, Product)

    @classmethod
    async def shutdown(cls) -> None:
        """Close all stores and clear the cache."""
        for db_type, store in cls._instances.items():
            try:
                await store.disconnect()
                logger.info(f"Disconnected: {db_type}")
            except Exception as e:
                logger.error(f"Error disconnecting {db_type}: {e}")

        cls._instances.clear()
        logger.info("All database connections closed")

    @classmethod
    def get_store(cls, db_type: Optional[DatabaseType] = None) -> BaseStore:
        """
        Get the initialized store.

        Raises:
            RuntimeError: If the store is not initialized
        """
        db_type = db_type or settings.DATABASE_TYPE

        if db_type not in cls._instances:
            raise RuntimeError(
                f"Store for {db_type} not initialized. "
                f"Call DatabaseFactory.initialize() first."
            )

        return cls._instances[db_type]

    @classmethod
    async def health_check(cls, db_type: Optional[DatabaseType] = None) -> bool:
        try:
            store = cls.get_store(db_type)
            return await store.health_check()
        except Exception:
            return False

    @classmethod
    def reset(cls) -> None:
        """
        Reset factory state.

        Clears the cache without disconnecting. Primarily for testing.
        """
        cls._instances.clear()
