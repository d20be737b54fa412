"""Persistence boundary for the curation engine.

Only two calls are assumed: a full catalog fetch and a single-row partial
update. There is no batch write; bulk commands are sequences of independent
row updates.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Protocol
from uuid import UUID

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rewardops_api.domain.curation.errors import CatalogReadError, CatalogWriteError
from rewardops_api.domain.curation.items import CatalogItem
from rewardops_api.models.reward import Reward


WRITABLE_FIELDS = frozenset(
    {
        "display_order",
        "is_active",
        "is_featured",
        "stock_quantity",
        "sponsor_enabled",
        "sponsor_name",
        "sponsor_logo",
        "sponsor_link",
        "sponsor_start_date",
        "sponsor_end_date",
        "status_tier_claims_cost",
    }
)


class RewardCatalogGateway(Protocol):
    """Row failures should surface as ``CatalogWriteError``; the executor
    records any other exception under its class name."""

    async def list_items(self) -> list[CatalogItem]:
        ...

    async def update_item(self, item_id: UUID, fields: Mapping[str, Any]) -> None:
        ...


def _persisted_order_key(reward: Reward) -> tuple[bool, int, datetime]:
    created = reward.created_at or datetime.min
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return (reward.display_order is None, reward.display_order or 0, created)


class SqlRewardCatalogGateway:
    """SQLAlchemy-backed gateway; every update commits on its own."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_items(self) -> list[CatalogItem]:
        try:
            result = await self._session.execute(select(Reward).execution_options(populate_existing=True))
            rewards = list(result.scalars())
        except SQLAlchemyError as exc:
            logger.exception("Failed to load reward catalog")
            raise CatalogReadError("Unable to load reward catalog") from exc

        rewards.sort(key=_persisted_order_key)
        return [
            reward.to_catalog_item(fallback_order=index)
            for index, reward in enumerate(rewards, start=1)
        ]

    async def update_item(self, item_id: UUID, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields are not writable: {', '.join(sorted(unknown))}")

        stmt = update(Reward).where(Reward.id == item_id).values(**dict(fields))
        try:
            result = await self._session.execute(stmt)
            if result.rowcount == 0:
                await self._session.rollback()
                raise CatalogWriteError(item_id, "not_found")
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.warning(
                "Reward update rejected",
                item_id=str(item_id),
                fields=sorted(fields),
                error=str(exc),
            )
            raise CatalogWriteError(item_id, exc.__class__.__name__) from exc


__all__ = ["RewardCatalogGateway", "SqlRewardCatalogGateway", "WRITABLE_FIELDS"]
