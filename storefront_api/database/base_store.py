# ==============================================================================
# BASE STORE - Abstract Interface
# ==============================================================================
# Defines the contract for all record stores
# Records are plain dictionaries keyed by column name
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from storefront_api.database.query import StoreQuery

Record = Dict[str, Any]


class BaseStore(ABC):
    """
    Abstract Base Class for record stores.

    Provides a uniform interface over named collections ("accounts",
    "products"). Services talk only to this interface, so tests can swap
    in an in-memory implementation.

    Error Contract:
        - ConflictError: unique constraint violated
        - ValidationError: unknown collection field or query operator
        - DatabaseError: anything else the backend fails on

    Example:
        >>> store = SQLAlchemyStore("sqlite+aiosqlite:///./dev.db")
        >>> await store.connect()
        >>> product = await store.create("products", {"name": "Mug", "price": 9})
        >>> await store.disconnect()
    """

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish the backend connection.

        Must be called before any other operation.

        Raises:
            DatabaseError: If the connection cannot be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release connections and clean up resources."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check that the backend answers.

        Returns:
            True if healthy, False otherwise
        """
        pass

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @abstractmethod
    @asynccontextmanager
    async def session(self) -> AsyncIterator[Any]:
        """
        Provide a transactional scope.

        Commits on successful exit, rolls back on exception.

        Raises:
            RuntimeError: If the store is not connected
        """
        yield None

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def create(self, collection: str, data: Dict[str, Any]) -> Record:
        """
        Insert a new record.

        Returns:
            The stored record, including generated id and timestamps

        Raises:
            ConflictError: If a unique constraint is violated
            ValidationError: If ``data`` names an unknown field
        """
        pass

    @abstractmethod
    async def get_by_id(self, collection: str, id: Any) -> Optional[Record]:
        """Retrieve a record by primary key, or None."""
        pass

    @abstractmethod
    async def find_first(self, collection: str, query: StoreQuery) -> Optional[Record]:
        """Return the first record matching ``query``, or None."""
        pass

    @abstractmethod
    async def find_many(self, collection: str, query: StoreQuery) -> List[Record]:
        """
        Return all records matching ``query``.

        Raises:
            ValidationError: If the query names an unknown field or operator
        """
        pass

    @abstractmethod
    async def update(
        self,
        collection: str,
        id: Any,
        data: Dict[str, Any],
    ) -> Optional[Record]:
        """
        Update an existing record with the given fields.

        Returns:
            Updated record, or None if no record has that id
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, id: Any) -> Optional[Record]:
        """
        Delete a record.

        Returns:
            The record as it was before deletion, or None if it did not exist
        """
        pass

    @abstractmethod
    async def count(self, collection: str, query: Optional[StoreQuery] = None) -> int:
        """Count records matching the conditions of ``query``."""
        pass
