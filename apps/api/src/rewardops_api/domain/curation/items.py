"""In-memory catalog item representation used by every curation component."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable
from uuid import UUID


class RewardCategory(str, Enum):
    """Catalog categories offered in the marketplace."""

    APP = "App"
    SUBSCRIPTION = "Subscription"
    ECOSYSTEM = "Ecosystem"
    EXPERIENCE = "Experience"
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"
    GAMING = "Gaming"
    FOOD_AND_BEVERAGE = "Food & Beverage"
    FASHION = "Fashion"
    OTHER = "Other"


class StatusTier(str, Enum):
    """Member status tiers, lowest first."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
    DIAMOND = "diamond"

    @property
    def rank(self) -> int:
        return TIER_ORDER.index(self)


TIER_ORDER: tuple[StatusTier, ...] = (
    StatusTier.BRONZE,
    StatusTier.SILVER,
    StatusTier.GOLD,
    StatusTier.PLATINUM,
    StatusTier.DIAMOND,
)


@dataclass(slots=True)
class CatalogItem:
    """One reward as loaded from the persistence boundary.

    ``stock_quantity`` of ``None`` means unlimited stock. ``claim_count`` and
    ``wishlist_count`` are read-only aggregates and are never written back.
    """

    id: UUID
    title: str
    category: str
    cost: int
    display_order: int
    stock_quantity: int | None = None
    is_active: bool = True
    is_featured: bool = False
    sponsor_enabled: bool = False
    sponsor_name: str | None = None
    sponsor_logo: str | None = None
    sponsor_link: str | None = None
    sponsor_start_date: datetime | None = None
    sponsor_end_date: datetime | None = None
    min_status_tier: StatusTier | None = None
    status_tier_claims_cost: dict[str, int] | None = None
    claim_count: int = 0
    wishlist_count: int = 0
    created_at: datetime | None = None

    def clone(self) -> "CatalogItem":
        return copy.deepcopy(self)


def clone_items(items: Iterable[CatalogItem]) -> list[CatalogItem]:
    return [item.clone() for item in items]


def index_by_id(items: Iterable[CatalogItem]) -> dict[UUID, CatalogItem]:
    return {item.id: item for item in items}


__all__ = [
    "CatalogItem",
    "RewardCategory",
    "StatusTier",
    "TIER_ORDER",
    "clone_items",
    "index_by_id",
]
