# ==============================================================================
# PRODUCT SERVICE - Catalog CRUD
# ==============================================================================
# Parameterized CRUD over the "products" collection
# ==============================================================================

from __future__ import annotations

import logging
from typing import List, Optional

from storefront_api.core.constants import DatabaseConstants, ErrorMessages
from storefront_api.core.exceptions import NotFoundError
from storefront_api.database.base_store import BaseStore, Record
from storefront_api.database.query import QueryTranslator
from storefront_api.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from storefront_api.schemas.query import QueryParams

logger = logging.getLogger(__name__)

_NULLABLE_FIELDS = frozenset({"description"})


class ProductService:
    """
    Product management.

    Pagination, ordering and filtering are translated and handed to the
    store as-is; there are no business rules beyond store constraints.

    Example:
        >>> service = ProductService(store, QueryTranslator())
        >>> await service.find_many(QueryParams(take=10, order_by=[{"price": "asc"}]))
    """

    def __init__(self, store: BaseStore, translator: QueryTranslator) -> None:
        self._store = store
        self._translator = translator
        self._collection_name = DatabaseConstants.PRODUCTS_COLLECTION

    def _to_response(self, record: Record) -> ProductResponse:
        return ProductResponse.model_validate(record)

    def _not_found(self, product_id: int) -> NotFoundError:
        return NotFoundError(
            message=ErrorMessages.PRODUCT_NOT_FOUND,
            resource_type="product",
            resource_id=product_id,
        )

    # ==========================================================================
    # QUERIES
    # ==========================================================================

    async def find_many(self, params: Optional[QueryParams] = None) -> List[ProductResponse]:
        """
        List products.

        Raises:
            ValidationError: If ``order_by``/``where`` names an unknown field
                or operator
        """
        records = await self._store.find_many(
            self._collection_name,
            self._translator.translate(params),
        )
        return [self._to_response(r) for r in records]

    async def count(self, params: Optional[QueryParams] = None) -> int:
        """Count products matching ``params.where``. Pagination is ignored."""
        where = params.where if params else None
        return await self._store.count(
            self._collection_name,
            self._translator.where(where),
        )

    async def find_one(self, product_id: int) -> ProductResponse:
        """
        Get a product by id.

        Raises:
            NotFoundError: If no product has this id
        """
        record = await self._store.get_by_id(self._collection_name, product_id)
        if not record:
            raise self._not_found(product_id)
        return self._to_response(record)

    # ==========================================================================
    # MUTATIONS
    # ==========================================================================

    async def create(self, data: ProductCreate) -> ProductResponse:
        record = await self._store.create(self._collection_name, data.model_dump())
        logger.info(f"Product created: {record['id']}")
        return self._to_response(record)

    async def update(self, product_id: int, data: ProductUpdate) -> ProductResponse:
        """
        Update the fields of ``data`` that were explicitly set.

        Raises:
            NotFoundError: If no product has this id
        """
        # Explicit nulls only clear nullable columns
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_FIELDS
        }
        if not changes:
            return await self.find_one(product_id)

        record = await self._store.update(self._collection_name, product_id, changes)
        if not record:
            raise self._not_found(product_id)
        return self._to_response(record)

    async def remove(self, product_id: int) -> ProductResponse:
        """
        Delete a product and return it as it was.

        Raises:
            NotFoundError: If no product has this id
        """
        record = await self._store.delete(self._collection_name, product_id)
        if not record:
            raise self._not_found(product_id)
        logger.info(f"Product deleted: {product_id}")
        return self._to_response(record)
