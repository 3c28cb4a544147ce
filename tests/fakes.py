# ==============================================================================
# FAKES - In-Memory Store for Service Tests
# ==============================================================================
# Implements the BaseStore contract with plain dictionaries
# ==============================================================================

from __future__ import annotations

import itertools
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

from storefront_api.core.exceptions import ConflictError, ValidationError
from storefront_api.database.base_store import BaseStore, Record
from storefront_api.database.query import Condition, StoreQuery

COLLECTION_FIELDS: Dict[str, frozenset] = {
    "accounts": frozenset(
        {"id", "email", "password_hash", "first_name", "last_name", "created_at", "updated_at"}
    ),
    "products": frozenset(
        {"id", "name", "description", "price", "quantity", "created_at", "updated_at"}
    ),
}

UNIQUE_FIELDS: Dict[str, tuple] = {
    "accounts": ("email",),
}


def _ordered(a: Any, b: Any, compare: Callable[[Any, Any], bool]) -> bool:
    if a is None or b is None:
        return False
    return compare(a, b)


_MATCHERS: Dict[str, Callable[[Any, Any], bool]] = {
    "equals": lambda a, v: a == v,
    "not": lambda a, v: a != v,
    "in": lambda a, v: a in v,
    "notIn": lambda a, v: a not in v,
    "lt": lambda a, v: _ordered(a, v, lambda x, y: x < y),
    "lte": lambda a, v: _ordered(a, v, lambda x, y: x <= y),
    "gt": lambda a, v: _ordered(a, v, lambda x, y: x > y),
    "gte": lambda a, v: _ordered(a, v, lambda x, y: x >= y),
    "contains": lambda a, v: a is not None and v in a,
    "startsWith": lambda a, v: a is not None and a.startswith(v),
    "endsWith": lambda a, v: a is not None and a.endswith(v),
}


class InMemoryStore(BaseStore):
    """Dictionary-backed store with the same error contract as SQLAlchemyStore."""

    def __init__(self) -> None:
        self._data: Dict[str, Dict[int, Record]] = {name: {} for name in COLLECTION_FIELDS}
        self._ids = {name: itertools.count(1) for name in COLLECTION_FIELDS}
        self.connected = False

    def _check_field(self, collection: str, field: str) -> None:
        if field not in COLLECTION_FIELDS[collection]:
            raise ValidationError(f"Unknown field '{field}'", errors={field: "unknown field"})

    def _matches(self, collection: str, record: Record, condition: Condition) -> bool:
        self._check_field(collection, condition.field)
        matcher = _MATCHERS.get(condition.operator)
        if matcher is None:
            raise ValidationError(
                f"Unknown operator '{condition.operator}'",
                errors={condition.field: "unknown operator"},
            )
        return matcher(record.get(condition.field), condition.value)

    def _filter(self, collection: str, query: Optional[StoreQuery]) -> List[Record]:
        records = list(self._data[collection].values())
        if query is None:
            return records
        return [
            r for r in records
            if all(self._matches(collection, r, c) for c in query.conditions)
        ]

    def _check_unique(self, collection: str, data: Dict[str, Any], own_id: Optional[int] = None) -> None:
        for field in UNIQUE_FIELDS.get(collection, ()):
            if field not in data:
                continue
            for record in self._data[collection].values():
                if record["id"] != own_id and record.get(field) == data[field]:
                    raise ConflictError(
                        f"Record conflicts with an existing '{collection}' record",
                        details={"collection": collection},
                    )

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def health_check(self) -> bool:
        return self.connected

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Any]:
        yield self._data

    # ==========================================================================
    # CRUD
    # ==========================================================================

    async def create(self, collection: str, data: Dict[str, Any]) -> Record:
        for field in data:
            self._check_field(collection, field)
        self._check_unique(collection, data)

        now = datetime.now(timezone.utc)
        record = {field: None for field in COLLECTION_FIELDS[collection]}
        record.update(data)
        record.update(id=next(self._ids[collection]), created_at=now, updated_at=now)
        self._data[collection][record["id"]] = record
        return dict(record)

    async def get_by_id(self, collection: str, id: Any) -> Optional[Record]:
        record = self._data[collection].get(id)
        return dict(record) if record else None

    async def find_first(self, collection: str, query: StoreQuery) -> Optional[Record]:
        results = await self.find_many(collection, query)
        return results[0] if results else None

    async def find_many(self, collection: str, query: StoreQuery) -> List[Record]:
        records = self._filter(collection, query)

        # Stable sorts applied last-key-first give multi-key ordering
        for ordering in reversed(query.ordering):
            self._check_field(collection, ordering.field)
            # NULLs sort first ascending and last descending, as in SQLite
            records.sort(
                key=lambda r: (r[ordering.field] is not None, r[ordering.field]),
                reverse=ordering.descending,
            )

        start = query.offset or 0
        end = start + query.limit if query.limit is not None else None
        return [dict(r) for r in records[start:end]]

    async def update(self, collection: str, id: Any, data: Dict[str, Any]) -> Optional[Record]:
        record = self._data[collection].get(id)
        if record is None:
            return None
        for field in data:
            self._check_field(collection, field)
        self._check_unique(collection, data, own_id=id)

        record.update(data)
        record["updated_at"] = datetime.now(timezone.utc)
        return dict(record)

    async def delete(self, collection: str, id: Any) -> Optional[Record]:
        record = self._data[collection].pop(id, None)
        return dict(record) if record else None

    async def count(self, collection: str, query: Optional[StoreQuery] = None) -> int:
        return len(self._filter(collection, query))
