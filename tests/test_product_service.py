# ==============================================================================
# PRODUCT SERVICE TESTS
# ==============================================================================

from decimal import Decimal

import pytest

from storefront_api.core.exceptions import NotFoundError, ValidationError
from storefront_api.schemas.product import ProductCreate, ProductUpdate
from storefront_api.schemas.query import QueryParams
from storefront_api.services.product_service import ProductService


async def _seed(service: ProductService) -> None:
    for name, price, quantity in [
        ("Coffee Mug", "9.99", 12),
        ("Tea Pot", "24.50", 3),
        ("Espresso Cup", "4.75", 40),
        ("Mug Rack", "15.00", 0),
    ]:
        await service.create(ProductCreate(name=name, price=price, quantity=quantity))


class TestProductCrud:
    """Tests for single-product operations."""

    @pytest.mark.asyncio
    async def test_create(self, product_service: ProductService, product_data: dict):
        product = await product_service.create(ProductCreate(**product_data))

        assert product.id == 1
        assert product.name == "Coffee Mug"
        assert product.price == Decimal("9.99")
        assert product.quantity == 12

    @pytest.mark.asyncio
    async def test_find_one(self, product_service: ProductService, product_data: dict):
        created = await product_service.create(ProductCreate(**product_data))

        assert await product_service.find_one(created.id) == created

    @pytest.mark.asyncio
    async def test_find_one_missing(self, product_service: ProductService):
        with pytest.raises(NotFoundError) as exc_info:
            await product_service.find_one(42)
        assert exc_info.value.resource_id == 42

    @pytest.mark.asyncio
    async def test_update_only_set_fields(self, product_service: ProductService, product_data: dict):
        created = await product_service.create(ProductCreate(**product_data))

        updated = await product_service.update(created.id, ProductUpdate(price="7.50"))

        assert updated.price == Decimal("7.50")
        assert updated.name == created.name
        assert updated.description == created.description
        assert updated.quantity == created.quantity

    @pytest.mark.asyncio
    async def test_update_can_clear_description(
        self, product_service: ProductService, product_data: dict
    ):
        created = await product_service.create(ProductCreate(**product_data))

        updated = await product_service.update(
            created.id, ProductUpdate(description=None, name=None)
        )

        assert updated.description is None
        assert updated.name == created.name

    @pytest.mark.asyncio
    async def test_update_missing(self, product_service: ProductService):
        with pytest.raises(NotFoundError):
            await product_service.update(42, ProductUpdate(name="Nothing"))

    @pytest.mark.asyncio
    async def test_remove_returns_deleted(self, product_service: ProductService, product_data: dict):
        created = await product_service.create(ProductCreate(**product_data))

        removed = await product_service.remove(created.id)

        assert removed == created
        with pytest.raises(NotFoundError):
            await product_service.find_one(created.id)

    @pytest.mark.asyncio
    async def test_remove_missing(self, product_service: ProductService):
        with pytest.raises(NotFoundError):
            await product_service.remove(42)


class TestProductListing:
    """Tests for find_many / count with query parameters."""

    @pytest.mark.asyncio
    async def test_find_many_all(self, product_service: ProductService):
        await _seed(product_service)

        products = await product_service.find_many()

        assert len(products) == 4

    @pytest.mark.asyncio
    async def test_order_and_paginate(self, product_service: ProductService):
        await _seed(product_service)

        products = await product_service.find_many(
            QueryParams(skip=1, take=2, order_by=[{"price": "desc"}])
        )

        assert [p.name for p in products] == ["Mug Rack", "Coffee Mug"]

    @pytest.mark.asyncio
    async def test_filter(self, product_service: ProductService):
        await _seed(product_service)

        params = QueryParams(where={"name": {"contains": "Mug"}, "quantity": {"gt": 0}})
        products = await product_service.find_many(params)

        assert [p.name for p in products] == ["Coffee Mug"]
        assert await product_service.count(params) == 1

    @pytest.mark.asyncio
    async def test_count_ignores_pagination(self, product_service: ProductService):
        await _seed(product_service)

        assert await product_service.count(QueryParams(take=1)) == 4

    @pytest.mark.asyncio
    async def test_unknown_field_surfaces_store_error(self, product_service: ProductService):
        await _seed(product_service)

        with pytest.raises(ValidationError):
            await product_service.find_many(QueryParams(where={"colour": "red"}))
