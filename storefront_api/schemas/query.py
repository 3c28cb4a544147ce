# ==============================================================================
# QUERY SCHEMAS - Pagination, Ordering, Filtering
# ==============================================================================
# Generic list parameters accepted by collection endpoints
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

SortOrder = Literal["asc", "desc"]


class QueryParams(BaseModel):
    """
    Generic query parameters for list operations.

    Only the shape is checked here. Field names and operators inside
    ``order_by`` / ``where`` are left for the store to accept or reject.

    Example:
        >>> QueryParams(
        ...     skip=0,
        ...     take=10,
        ...     order_by=[{"price": "desc"}, {"name": "asc"}],
        ...     where={"price": {"gte": 10}, "name": {"contains": "mug"}},
        ... )
    """

    skip: Optional[int] = Field(
        None,
        ge=0,
        description="Number of records to skip"
    )
    take: Optional[int] = Field(
        None,
        ge=0,
        description="Maximum records to return"
    )
    order_by: List[Dict[str, SortOrder]] = Field(
        default_factory=list,
        description="Ordered list of {field: direction} pairs"
    )
    where: Dict[str, Any] = Field(
        default_factory=dict,
        description="Field to value (equality) or {operator: value}"
    )
