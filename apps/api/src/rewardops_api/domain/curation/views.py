"""Filtered, sorted projections of the catalog.

``build_view`` is total: unknown category, bucket or tier values simply match
nothing and produce an empty view.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable

from .items import TIER_ORDER, CatalogItem, StatusTier
from .ordering import sort_by_display_order


LOW_STOCK_CEILING = 5

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class CatalogBucket(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    FEATURED = "featured"
    SPONSORED = "sponsored"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


class TierFilter(str, Enum):
    UNRESTRICTED = "unrestricted"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
    DIAMOND = "diamond"
    TIERED_PRICING = "tiered_pricing"


class SortField(str, Enum):
    TITLE = "title"
    COST = "cost"
    STOCK = "stock"
    CLAIM_COUNT = "claim_count"
    WISHLIST_COUNT = "wishlist_count"
    CREATED_AT = "created_at"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class CatalogFilters:
    """Active filters; every populated criterion must match."""

    search: str | None = None
    category: str | None = None
    buckets: frozenset[str] = field(default_factory=frozenset)
    tier: str | None = None
    preview_tier: StatusTier | None = None


@dataclass(frozen=True)
class SortSpec:
    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC


def has_tier_pricing(item: CatalogItem) -> bool:
    """True when some tier pays a different claim cost than the base price."""

    costs = item.status_tier_claims_cost
    if not costs:
        return False
    values = [value for value in costs.values() if isinstance(value, (int, float)) and not isinstance(value, bool)]
    return any(value != item.cost for value in values)


def can_tier_access(tier: StatusTier, min_tier: StatusTier | None) -> bool:
    if min_tier is None:
        return True
    return TIER_ORDER.index(tier) >= TIER_ORDER.index(min_tier)


def _is_low_stock(item: CatalogItem) -> bool:
    return item.stock_quantity is not None and 0 < item.stock_quantity < LOW_STOCK_CEILING


def _is_out_of_stock(item: CatalogItem) -> bool:
    return item.stock_quantity is not None and item.stock_quantity == 0


_BUCKET_PREDICATES: dict[str, Callable[[CatalogItem], bool]] = {
    CatalogBucket.ACTIVE.value: lambda item: item.is_active,
    CatalogBucket.INACTIVE.value: lambda item: not item.is_active,
    CatalogBucket.FEATURED.value: lambda item: item.is_featured,
    CatalogBucket.SPONSORED.value: lambda item: item.sponsor_enabled and bool(item.sponsor_name),
    CatalogBucket.LOW_STOCK.value: _is_low_stock,
    CatalogBucket.OUT_OF_STOCK.value: _is_out_of_stock,
}


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _matches_tier(item: CatalogItem, tier: str) -> bool:
    if tier == TierFilter.UNRESTRICTED.value:
        return item.min_status_tier is None
    if tier == TierFilter.TIERED_PRICING.value:
        return has_tier_pricing(item)
    return item.min_status_tier is not None and item.min_status_tier.value == tier


def matches(item: CatalogItem, filters: CatalogFilters) -> bool:
    if filters.search:
        if filters.search.strip().lower() not in (item.title or "").lower():
            return False

    if filters.category and _enum_value(filters.category) != "all":
        if item.category != _enum_value(filters.category):
            return False

    for bucket in filters.buckets:
        predicate = _BUCKET_PREDICATES.get(_enum_value(bucket))
        if predicate is None or not predicate(item):
            return False

    if filters.tier and _enum_value(filters.tier) != "all":
        if not _matches_tier(item, _enum_value(filters.tier)):
            return False

    if filters.preview_tier is not None:
        if not item.is_active or not can_tier_access(filters.preview_tier, item.min_status_tier):
            return False

    return True


def _sort_key(sort_field: SortField) -> Callable[[CatalogItem], Any]:
    if sort_field is SortField.TITLE:
        return lambda item: (item.title or "").lower()
    if sort_field is SortField.COST:
        return lambda item: item.cost
    if sort_field is SortField.STOCK:
        return lambda item: float("inf") if item.stock_quantity is None else item.stock_quantity
    if sort_field is SortField.CLAIM_COUNT:
        return lambda item: item.claim_count
    if sort_field is SortField.WISHLIST_COUNT:
        return lambda item: item.wishlist_count
    return _created_at_key


def _created_at_key(item: CatalogItem) -> datetime:
    created = item.created_at
    if created is None:
        return _EPOCH
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


def build_view(
    items: Iterable[CatalogItem],
    filters: CatalogFilters | None = None,
    sort: SortSpec | None = None,
    *,
    order_mode: bool = False,
) -> list[CatalogItem]:
    """Visible items in presentation order.

    In ordering mode the sort selection is ignored and rows always follow
    ascending ``display_order``, so drag handles line up with real positions.
    """

    active_filters = filters or CatalogFilters()
    visible = [item for item in items if matches(item, active_filters)]

    if order_mode:
        return sort_by_display_order(visible)

    spec = sort or SortSpec()
    return sorted(
        visible,
        key=_sort_key(SortField(spec.field)),
        reverse=SortDirection(spec.direction) is SortDirection.DESC,
    )


__all__ = [
    "CatalogBucket",
    "CatalogFilters",
    "LOW_STOCK_CEILING",
    "SortDirection",
    "SortField",
    "SortSpec",
    "TierFilter",
    "build_view",
    "can_tier_access",
    "has_tier_pricing",
    "matches",
]
