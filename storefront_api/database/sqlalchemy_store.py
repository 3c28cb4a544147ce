# ==============================================================================
# SQLALCHEMY STORE - Async SQLAlchemy (aiosqlite / asyncpg)
# ==============================================================================
# Executes StoreQuery objects against registered declarative models
# SQLite for development and testing, PostgreSQL for production
# ==============================================================================

from __future__ import annotations

import dataclasses
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Type

from sqlalchemy import Select, and_, func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql.elements import ColumnElement

from storefront_api.core.exceptions import (
    AppException,
    ConflictError,
    DatabaseError,
    ValidationError,
)
from storefront_api.core.settings import settings
from storefront_api.database.base_store import BaseStore, Record
from storefront_api.database.models import SQLBase
from storefront_api.database.query import OPERATORS, Condition, StoreQuery

logger = logging.getLogger(__name__)


def _as_list(operator: str, value: Any) -> List[Any]:
    if not isinstance(value, (list, tuple, set)):
        raise ValidationError(
            f"Operator '{operator}' expects a list",
            errors={operator: "expected a list"},
        )
    return list(value)


def _as_text(operator: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(
            f"Operator '{operator}' expects a string",
            errors={operator: "expected a string"},
        )
    return value


# Operator name -> builder of a SQL expression for (column, value)
_OPERATORS: Dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "equals": lambda col, v: col.is_(None) if v is None else col == v,
    "not": lambda col, v: col.is_not(None) if v is None else col != v,
    "in": lambda col, v: col.in_(_as_list("in", v)),
    "notIn": lambda col, v: col.not_in(_as_list("notIn", v)),
    "lt": lambda col, v: col < v,
    "lte": lambda col, v: col <= v,
    "gt": lambda col, v: col > v,
    "gte": lambda col, v: col >= v,
    "contains": lambda col, v: col.contains(_as_text("contains", v), autoescape=True),
    "startsWith": lambda col, v: col.startswith(_as_text("startsWith", v), autoescape=True),
    "endsWith": lambda col, v: col.endswith(_as_text("endsWith", v), autoescape=True),
}


class SQLAlchemyStore(BaseStore):
    """
    Record store on SQLAlchemy async.

    Collections map to declarative models through a registry; records go in
    and come out as plain dictionaries.

    Attributes:
        _database_url: Async connection string
        _engine: SQLAlchemy async engine
        _session_factory: Session factory for creating sessions
        _model_registry: Mapping of collection names to model classes

    Example:
        >>> store = SQLAlchemyStore("sqlite+aiosqlite:///./dev.db")
        >>> store.register_model("products", Product)
        >>> await store.connect()  # creates tables
        >>> await store.find_many("products", StoreQuery(limit=10))
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        echo: Optional[bool] = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            database_url: Async connection URL (defaults to settings)
            echo: Log emitted SQL (defaults to settings.DEBUG)
        """
        url = database_url or settings.database_url
        # Ensure async driver is used
        if url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)

        self._database_url = url
        self._echo = settings.DEBUG if echo is None else echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._model_registry: Dict[str, Type[SQLBase]] = {}

    # ==========================================================================
    # MODEL REGISTRY
    # ==========================================================================

    def register_model(self, name: str, model: Type[SQLBase]) -> None:
        """Register a model as the backing table of a collection."""
        self._model_registry[name] = model
        logger.debug(f"Registered model '{name}' -> {model.__name__}")

    def _get_model(self, collection: str) -> Type[SQLBase]:
        if collection not in self._model_registry:
            raise ValueError(
                f"Model '{collection}' not registered. "
                f"Available models: {list(self._model_registry.keys())}"
            )
        return self._model_registry[collection]

    @staticmethod
    def _get_column(model: Type[SQLBase], field: str) -> Any:
        if field not in model.__table__.columns:
            raise ValidationError(
                f"Unknown field '{field}' for {model.__tablename__}",
                errors={field: "unknown field"},
            )
        return getattr(model, field)

    def _check_fields(self, model: Type[SQLBase], data: Dict[str, Any]) -> None:
        for field in data:
            self._get_column(model, field)

    # ==========================================================================
    # QUERY BUILDING
    # ==========================================================================

    def _build_condition(
        self,
        model: Type[SQLBase],
        condition: Condition,
    ) -> ColumnElement[bool]:
        column = self._get_column(model, condition.field)
        builder = _OPERATORS.get(condition.operator)
        if builder is None:
            raise ValidationError(
                f"Unknown operator '{condition.operator}' on field '{condition.field}'",
                errors={
                    condition.field: f"unknown operator '{condition.operator}'",
                    "supported": list(OPERATORS),
                },
            )
        return builder(column, condition.value)

    def _apply_conditions(
        self,
        stmt: Select,
        model: Type[SQLBase],
        query: Optional[StoreQuery],
    ) -> Select:
        if query and query.conditions:
            clauses = [self._build_condition(model, c) for c in query.conditions]
            stmt = stmt.where(and_(*clauses))
        return stmt

    def _build_select(self, model: Type[SQLBase], query: StoreQuery) -> Select:
        stmt = self._apply_conditions(select(model), model, query)

        for ordering in query.ordering:
            column = self._get_column(model, ordering.field)
            stmt = stmt.order_by(column.desc() if ordering.descending else column.asc())

        if query.offset:
            stmt = stmt.offset(query.offset)
        if query.limit is not None:
            stmt = stmt.limit(query.limit)
        return stmt

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """Create the engine and any missing tables."""
        connect_args: Dict[str, Any] = {}
        if self._database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        try:
            self._engine = create_async_engine(
                self._database_url,
                echo=self._echo,
                connect_args=connect_args,
            )

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            async with self._engine.begin() as conn:
                await conn.run_sync(SQLBase.metadata.create_all)

            logger.info(f"Store connected ({self._engine.dialect.name})")

        except Exception as e:
            logger.error(f"Failed to connect store: {e}")
            raise DatabaseError(f"Database connection failed: {e}")

    async def disconnect(self) -> None:
        """Dispose the engine and its pool."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Store disconnected")

    async def health_check(self) -> bool:
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Store health check failed: {e}")
            return False

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide transactional session scope.

        Commits on successful exit, rolls back on exception.

        Raises:
            RuntimeError: If database not connected
        """
        if not self._session_factory:
            raise RuntimeError(
                "Database not connected. Call connect() first."
            )

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def _translate_errors(self, collection: str) -> AsyncIterator[None]:
        """Map driver errors onto the application error hierarchy."""
        try:
            yield
        except AppException:
            raise
        except IntegrityError as e:
            logger.warning(f"Constraint violation on '{collection}': {e.orig}")
            raise ConflictError(
                f"Record conflicts with an existing '{collection}' record",
                details={"collection": collection},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error on '{collection}': {e}")
            raise DatabaseError(
                f"Database operation failed on '{collection}'",
                details={"collection": collection},
            )

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(self, collection: str, data: Dict[str, Any]) -> Record:
        model = self._get_model(collection)
        self._check_fields(model, data)

        async with self._translate_errors(collection):
            async with self.session() as session:
                instance = model(**data)
                session.add(instance)
                await session.flush()
                await session.refresh(instance)
                return instance.to_dict()

    async def get_by_id(self, collection: str, id: Any) -> Optional[Record]:
        model = self._get_model(collection)

        async with self._translate_errors(collection):
            async with self.session() as session:
                instance = await session.get(model, id)
                return instance.to_dict() if instance else None

    async def find_first(self, collection: str, query: StoreQuery) -> Optional[Record]:
        results = await self.find_many(collection, dataclasses.replace(query, limit=1))
        return results[0] if results else None

    async def find_many(self, collection: str, query: StoreQuery) -> List[Record]:
        model = self._get_model(collection)
        stmt = self._build_select(model, query)

        async with self._translate_errors(collection):
            async with self.session() as session:
                result = await session.execute(stmt)
                return [row.to_dict() for row in result.scalars().all()]

    async def update(
        self,
        collection: str,
        id: Any,
        data: Dict[str, Any],
    ) -> Optional[Record]:
        model = self._get_model(collection)
        self._check_fields(model, data)

        async with self._translate_errors(collection):
            async with self.session() as session:
                instance = await session.get(model, id)
                if not instance:
                    return None

                for key, value in data.items():
                    setattr(instance, key, value)

                await session.flush()
                await session.refresh(instance)
                return instance.to_dict()

    async def delete(self, collection: str, id: Any) -> Optional[Record]:
        model = self._get_model(collection)

        async with self._translate_errors(collection):
            async with self.session() as session:
                instance = await session.get(model, id)
                if not instance:
                    return None

                record = instance.to_dict()
                await session.delete(instance)
                return record

    async def count(self, collection: str, query: Optional[StoreQuery] = None) -> int:
        model = self._get_model(collection)
        stmt = self._apply_conditions(select(func.count()).select_from(model), model, query)

        async with self._translate_errors(collection):
            async with self.session() as session:
                result = await session.execute(stmt)
                return result.scalar() or 0
