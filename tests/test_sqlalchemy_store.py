# ==============================================================================
# SQLALCHEMY STORE TESTS
# ==============================================================================
# CRUD, query execution and error mapping against a real SQLite file
# ==============================================================================

from decimal import Decimal

import pytest

from storefront_api.core.exceptions import ConflictError, ValidationError
from storefront_api.database.base_store import BaseStore
from storefront_api.database.factory import DatabaseFactory
from storefront_api.database.query import Condition, Ordering, StoreQuery
from storefront_api.database.sqlalchemy_store import SQLAlchemyStore

ACCOUNT = {
    "email": "test@email.com",
    "password_hash": "hash",
    "first_name": "John",
    "last_name": "Doe",
}


async def _seed_products(store: BaseStore) -> None:
    for name, price, quantity in [
        ("Coffee Mug", Decimal("9.99"), 12),
        ("Tea Pot", Decimal("24.50"), 3),
        ("Espresso Cup", Decimal("4.75"), 40),
        ("Mug Rack", Decimal("15.00"), 0),
    ]:
        await store.create("products", {"name": name, "price": price, "quantity": quantity})


def _names(records) -> list:
    return [r["name"] for r in records]


async def _assert_nulls_ordered(target: BaseStore) -> None:
    await target.create("products", {"name": "Plain", "price": Decimal("1.00")})
    await target.create(
        "products", {"name": "Described", "price": Decimal("2.00"), "description": "Blue"}
    )

    ascending = await target.find_many("products", StoreQuery(ordering=(Ordering("description"),)))
    descending = await target.find_many(
        "products", StoreQuery(ordering=(Ordering("description", descending=True),))
    )

    assert _names(ascending) == ["Plain", "Described"]
    assert _names(descending) == ["Described", "Plain"]


class TestStoreCrud:
    """Tests for basic record operations."""

    @pytest.mark.asyncio
    async def test_create_generates_id_and_timestamps(self, store: BaseStore):
        record = await store.create("accounts", dict(ACCOUNT))

        assert record["id"] == 1
        assert record["email"] == "test@email.com"
        assert record["created_at"] is not None
        assert record["updated_at"] is not None

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, store: BaseStore):
        await store.create("accounts", dict(ACCOUNT))

        with pytest.raises(ConflictError):
            await store.create("accounts", dict(ACCOUNT, first_name="Jane"))

        assert await store.count("accounts") == 1

    @pytest.mark.asyncio
    async def test_create_unknown_field(self, store: BaseStore):
        with pytest.raises(ValidationError):
            await store.create("products", {"name": "Mug", "price": 1, "colour": "red"})

    @pytest.mark.asyncio
    async def test_get_by_id(self, store: BaseStore):
        created = await store.create("products", {"name": "Mug", "price": Decimal("9.99")})

        record = await store.get_by_id("products", created["id"])

        assert record["name"] == "Mug"
        assert record["price"] == Decimal("9.99")
        assert record["quantity"] == 0
        assert await store.get_by_id("products", 999) is None

    @pytest.mark.asyncio
    async def test_update(self, store: BaseStore):
        created = await store.create("products", {"name": "Mug", "price": Decimal("9.99")})

        updated = await store.update("products", created["id"], {"quantity": 5})

        assert updated["quantity"] == 5
        assert updated["name"] == "Mug"
        assert await store.update("products", 999, {"quantity": 5}) is None

    @pytest.mark.asyncio
    async def test_delete_returns_record(self, store: BaseStore):
        created = await store.create("products", {"name": "Mug", "price": Decimal("9.99")})

        deleted = await store.delete("products", created["id"])

        assert deleted["id"] == created["id"]
        assert deleted["name"] == "Mug"
        assert await store.get_by_id("products", created["id"]) is None
        assert await store.delete("products", created["id"]) is None


class TestStoreQueries:
    """Tests for StoreQuery execution."""

    @pytest.mark.asyncio
    async def test_ordering_and_pagination(self, store: BaseStore):
        await _seed_products(store)

        records = await store.find_many(
            "products",
            StoreQuery(offset=1, limit=2, ordering=(Ordering("price", descending=True),)),
        )

        assert _names(records) == ["Mug Rack", "Coffee Mug"]

    @pytest.mark.asyncio
    async def test_multi_key_ordering(self, store: BaseStore):
        await store.create("products", {"name": "B", "price": Decimal("1.00")})
        await store.create("products", {"name": "A", "price": Decimal("1.00")})
        await store.create("products", {"name": "C", "price": Decimal("0.50")})

        records = await store.find_many(
            "products",
            StoreQuery(ordering=(Ordering("price"), Ordering("name"))),
        )

        assert _names(records) == ["C", "A", "B"]

    @pytest.mark.asyncio
    async def test_ordering_by_nullable_column(self, store: BaseStore):
        await _assert_nulls_ordered(store)

    @pytest.mark.asyncio
    async def test_in_memory_store_orders_nullable_column_alike(self, memory_store: BaseStore):
        await _assert_nulls_ordered(memory_store)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "condition, expected",
        [
            (Condition("name", "equals", "Tea Pot"), ["Tea Pot"]),
            (Condition("name", "not", "Tea Pot"), ["Coffee Mug", "Espresso Cup", "Mug Rack"]),
            (Condition("quantity", "in", [0, 3]), ["Tea Pot", "Mug Rack"]),
            (Condition("quantity", "notIn", [0, 3]), ["Coffee Mug", "Espresso Cup"]),
            (Condition("quantity", "lt", 3), ["Mug Rack"]),
            (Condition("quantity", "lte", 3), ["Tea Pot", "Mug Rack"]),
            (Condition("quantity", "gt", 12), ["Espresso Cup"]),
            (Condition("quantity", "gte", 12), ["Coffee Mug", "Espresso Cup"]),
            (Condition("name", "contains", "Mug"), ["Coffee Mug", "Mug Rack"]),
            (Condition("name", "startsWith", "Mug"), ["Mug Rack"]),
            (Condition("name", "endsWith", "Cup"), ["Espresso Cup"]),
        ],
    )
    async def test_operators(self, store: BaseStore, condition: Condition, expected: list):
        await _seed_products(store)

        records = await store.find_many(
            "products",
            StoreQuery(ordering=(Ordering("id"),), conditions=(condition,)),
        )

        assert _names(records) == expected

    @pytest.mark.asyncio
    async def test_conditions_are_anded(self, store: BaseStore):
        await _seed_products(store)

        query = StoreQuery(
            conditions=(
                Condition("name", "contains", "Mug"),
                Condition("quantity", "gt", 0),
            )
        )

        assert _names(await store.find_many("products", query)) == ["Coffee Mug"]
        assert await store.count("products", query) == 1

    @pytest.mark.asyncio
    async def test_find_first(self, store: BaseStore):
        await _seed_products(store)

        record = await store.find_first(
            "products",
            StoreQuery(ordering=(Ordering("price"),)),
        )

        assert record["name"] == "Espresso Cup"
        assert await store.find_first(
            "products", StoreQuery(conditions=(Condition("name", "equals", "Nope"),))
        ) is None

    @pytest.mark.asyncio
    async def test_unknown_field(self, store: BaseStore):
        with pytest.raises(ValidationError):
            await store.find_many(
                "products", StoreQuery(conditions=(Condition("colour", "equals", "red"),))
            )
        with pytest.raises(ValidationError):
            await store.find_many("products", StoreQuery(ordering=(Ordering("colour"),)))

    @pytest.mark.asyncio
    async def test_unknown_operator(self, store: BaseStore):
        with pytest.raises(ValidationError):
            await store.find_many(
                "products", StoreQuery(conditions=(Condition("name", "like", "Mug%"),))
            )

    @pytest.mark.asyncio
    async def test_in_requires_list(self, store: BaseStore):
        with pytest.raises(ValidationError):
            await store.find_many(
                "products", StoreQuery(conditions=(Condition("quantity", "in", 3),))
            )


class TestStoreLifecycle:
    """Tests for connection management."""

    @pytest.mark.asyncio
    async def test_health_check(self, store: BaseStore):
        assert await store.health_check() is True
        assert await DatabaseFactory.health_check() is True

    @pytest.mark.asyncio
    async def test_session_requires_connect(self, tmp_path):
        unconnected = SQLAlchemyStore(f"sqlite+aiosqlite:///{tmp_path / 'idle.db'}")

        with pytest.raises(RuntimeError):
            async with unconnected.session():
                pass
        assert await unconnected.health_check() is False

    @pytest.mark.asyncio
    async def test_factory_requires_initialize(self):
        DatabaseFactory.reset()

        with pytest.raises(RuntimeError):
            DatabaseFactory.get_store()
        assert await DatabaseFactory.health_check() is False
