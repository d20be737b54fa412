"""Reward catalog rows administered by the curation engine."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID

from rewardops_api.db.base import Base
from rewardops_api.domain.curation.items import CatalogItem, StatusTier


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Reward(Base):
    """One redeemable catalog entry, including sponsorship and tier pricing."""

    __tablename__ = "rewards"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, index=True)
    cost = Column(Integer, nullable=False, default=0)
    image_url = Column(String, nullable=True)
    stock_quantity = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")
    is_featured = Column(Boolean, nullable=False, default=False, server_default="false")
    display_order = Column(Integer, nullable=True, index=True)
    min_status_tier = Column(String, nullable=True)
    status_tier_claims_cost = Column(JSON, nullable=True)
    sponsor_enabled = Column(Boolean, nullable=False, default=False, server_default="false")
    sponsor_name = Column(String, nullable=True)
    sponsor_logo = Column(String, nullable=True)
    sponsor_link = Column(String, nullable=True)
    sponsor_start_date = Column(DateTime(timezone=True), nullable=True)
    sponsor_end_date = Column(DateTime(timezone=True), nullable=True)
    claim_count = Column(Integer, nullable=False, default=0, server_default="0")
    wishlist_count = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def to_catalog_item(self, *, fallback_order: int) -> CatalogItem:
        """Project the row into the engine's in-memory representation."""

        tier: StatusTier | None = None
        if self.min_status_tier:
            try:
                tier = StatusTier(self.min_status_tier)
            except ValueError:
                tier = None

        pricing = self.status_tier_claims_cost if isinstance(self.status_tier_claims_cost, dict) else None

        return CatalogItem(
            id=self.id,
            title=self.title,
            category=self.category,
            cost=int(self.cost or 0),
            stock_quantity=self.stock_quantity,
            is_active=bool(self.is_active),
            is_featured=bool(self.is_featured),
            display_order=self.display_order if self.display_order is not None else fallback_order,
            sponsor_enabled=bool(self.sponsor_enabled),
            sponsor_name=self.sponsor_name,
            sponsor_logo=self.sponsor_logo,
            sponsor_link=self.sponsor_link,
            sponsor_start_date=_as_utc(self.sponsor_start_date),
            sponsor_end_date=_as_utc(self.sponsor_end_date),
            min_status_tier=tier,
            status_tier_claims_cost=dict(pricing) if pricing is not None else None,
            claim_count=int(self.claim_count or 0),
            wishlist_count=int(self.wishlist_count or 0),
            created_at=_as_utc(self.created_at),
        )
