# ==============================================================================
# PRODUCTS ENDPOINTS - Catalog Routes
# ==============================================================================
# Product listing with skip/take/order_by/where and authenticated writes
# ==============================================================================

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status
from pydantic import ValidationError as PydanticValidationError

from storefront_api.api.dependencies import CurrentAccount, ProductServiceDep
from storefront_api.core.constants import APIConstants
from storefront_api.core.exceptions import ValidationError
from storefront_api.schemas.base import APIResponse
from storefront_api.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from storefront_api.schemas.query import QueryParams

router = APIRouter(prefix="/products", tags=["Products"])


def parse_order_by(values: Optional[List[str]]) -> List[Dict[str, str]]:
    """
    Parse repeated ``order_by=field:dir`` values.

    The direction defaults to ``asc``.

    Example:
        >>> parse_order_by(["price:desc", "name"])
        [{'price': 'desc'}, {'name': 'asc'}]
    """
    order_by: List[Dict[str, str]] = []
    for value in values or []:
        field, _, direction = value.partition(":")
        direction = (direction or "asc").strip().lower()
        if not field.strip() or direction not in ("asc", "desc"):
            raise ValidationError(
                f"Invalid order_by value '{value}'",
                errors={"order_by": "expected 'field' or 'field:asc|desc'"},
            )
        order_by.append({field.strip(): direction})
    return order_by


def parse_where(value: Optional[str]) -> Dict[str, Any]:
    """Parse the ``where`` query parameter, a JSON object."""
    if not value:
        return {}
    try:
        where = json.loads(value)
    except json.JSONDecodeError:
        raise ValidationError(
            "Invalid where filter",
            errors={"where": "must be a JSON object"},
        )
    if not isinstance(where, dict):
        raise ValidationError(
            "Invalid where filter",
            errors={"where": "must be a JSON object"},
        )
    return where


@router.get(
    "",
    response_model=APIResponse[List[ProductResponse]],
    summary="List products",
    description=(
        "List products with pagination (skip/take), ordering "
        "(repeated order_by=field:asc|desc) and filtering "
        '(where={"price": {"gte": 10}}).'
    ),
)
async def list_products(
    service: ProductServiceDep,
    skip: int = Query(0, ge=0),
    take: int = Query(APIConstants.DEFAULT_PAGE_SIZE, ge=0, le=APIConstants.MAX_PAGE_SIZE),
    order_by: Optional[List[str]] = Query(None),
    where: Optional[str] = Query(None),
) -> APIResponse[List[ProductResponse]]:
    try:
        params = QueryParams(
            skip=skip,
            take=take,
            order_by=parse_order_by(order_by),
            where=parse_where(where),
        )
    except PydanticValidationError as e:
        raise ValidationError("Invalid query parameters", errors={"query": str(e)})

    products = await service.find_many(params)
    total = await service.count(params)
    return APIResponse.ok(data=products, total=total)


@router.get(
    "/{product_id}",
    response_model=APIResponse[ProductResponse],
    summary="Get product",
)
async def get_product(
    product_id: int,
    service: ProductServiceDep,
) -> APIResponse[ProductResponse]:
    product = await service.find_one(product_id)
    return APIResponse.ok(data=product)


@router.post(
    "",
    response_model=APIResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(
    account: CurrentAccount,
    schema: ProductCreate,
    service: ProductServiceDep,
) -> APIResponse[ProductResponse]:
    product = await service.create(schema)
    return APIResponse.ok(data=product, message="Product created successfully")


@router.patch(
    "/{product_id}",
    response_model=APIResponse[ProductResponse],
    summary="Update product",
    description="Update only the fields present in the body.",
)
async def update_product(
    account: CurrentAccount,
    product_id: int,
    schema: ProductUpdate,
    service: ProductServiceDep,
) -> APIResponse[ProductResponse]:
    product = await service.update(product_id, schema)
    return APIResponse.ok(data=product, message="Product updated successfully")


@router.delete(
    "/{product_id}",
    response_model=APIResponse[ProductResponse],
    summary="Delete product",
    description="Delete a product and return it as it was.",
)
async def delete_product(
    account: CurrentAccount,
    product_id: int,
    service: ProductServiceDep,
) -> APIResponse[ProductResponse]:
    product = await service.remove(product_id)
    return APIResponse.ok(data=product, message="Product deleted successfully")
