# ==============================================================================
# QUERY TRANSLATOR - Store-Neutral Query Shape
# ==============================================================================
# Maps generic skip/take/order_by/where parameters onto a StoreQuery that
# any BaseStore implementation knows how to execute
# ==============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Final, List, Mapping, Optional, Tuple

from storefront_api.schemas.query import QueryParams

# Operators a store is expected to understand. The translator does not
# enforce this list; stores reject anything else with ValidationError.
OPERATORS: Final[Tuple[str, ...]] = (
    "equals",
    "not",
    "in",
    "notIn",
    "lt",
    "lte",
    "gt",
    "gte",
    "contains",
    "startsWith",
    "endsWith",
)


@dataclass(frozen=True)
class Condition:
    """A single ``field <operator> value`` filter."""

    field: str
    operator: str
    value: Any


@dataclass(frozen=True)
class Ordering:
    """A single sort key."""

    field: str
    descending: bool = False


@dataclass(frozen=True)
class StoreQuery:
    """
    Pagination, ordering and filtering in a shape independent of any
    particular database.

    Conditions are ANDed. Orderings apply in sequence.
    """

    offset: Optional[int] = None
    limit: Optional[int] = None
    ordering: Tuple[Ordering, ...] = ()
    conditions: Tuple[Condition, ...] = ()


class QueryTranslator:
    """
    Pure mapping from :class:`QueryParams` to :class:`StoreQuery`.

    Example:
        >>> translator = QueryTranslator()
        >>> query = translator.translate(
        ...     QueryParams(take=5, order_by=[{"price": "desc"}], where={"name": "Mug"})
        ... )
        >>> query.conditions
        (Condition(field='name', operator='equals', value='Mug'),)
    """

    def translate(self, params: Optional[QueryParams] = None) -> StoreQuery:
        """Translate a full set of list parameters."""
        if params is None:
            return StoreQuery()

        return StoreQuery(
            offset=params.skip,
            limit=params.take,
            ordering=self.translate_order_by(params.order_by),
            conditions=self.translate_where(params.where),
        )

    def translate_where(self, where: Optional[Mapping[str, Any]]) -> Tuple[Condition, ...]:
        """
        Translate a ``where`` mapping.

        ``{"email": "a@b.c"}`` and ``{"email": {"equals": "a@b.c"}}`` are
        equivalent. Several operators on one field produce several
        conditions.
        """
        conditions: List[Condition] = []
        for field, criterion in (where or {}).items():
            if isinstance(criterion, Mapping):
                for operator, value in criterion.items():
                    conditions.append(Condition(field, operator, value))
            else:
                conditions.append(Condition(field, "equals", criterion))
        return tuple(conditions)

    def translate_order_by(
        self,
        order_by: Optional[List[Dict[str, str]]],
    ) -> Tuple[Ordering, ...]:
        """Translate ``[{field: "asc" | "desc"}, ...]`` keeping its order."""
        ordering: List[Ordering] = []
        for entry in order_by or []:
            for field, direction in entry.items():
                ordering.append(Ordering(field, descending=str(direction).lower() == "desc"))
        return tuple(ordering)

    def where(self, where: Optional[Mapping[str, Any]], limit: Optional[int] = None) -> StoreQuery:
        """Build a filter-only query, as used by lookups like find-by-email."""
        return StoreQuery(limit=limit, conditions=self.translate_where(where))
