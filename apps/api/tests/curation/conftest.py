from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Mapping
from uuid import UUID, uuid4

import pytest

from rewardops_api.domain.curation import CatalogItem, CatalogReadError, CatalogWriteError
from rewardops_api.domain.curation.items import clone_items
from rewardops_api.observability.curation import CurationObservabilityStore
from rewardops_api.services.curation import RewardCatalogGateway


NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


def build_item(order: int, **overrides: Any) -> CatalogItem:
    values: dict[str, Any] = {
        "id": uuid4(),
        "title": f"Reward {order}",
        "category": "Gaming",
        "cost": 100 * order,
        "display_order": order,
        "stock_quantity": 10,
        "created_at": NOW - timedelta(days=order),
    }
    values.update(overrides)
    return CatalogItem(**values)


@pytest.fixture
def make_item() -> Callable[..., CatalogItem]:
    return build_item


@pytest.fixture
def five_items() -> list[CatalogItem]:
    return [build_item(order) for order in range(1, 6)]


class FakeCatalogGateway(RewardCatalogGateway):
    """In-memory gateway that records writes and can be told to fail."""

    def __init__(self, items: Iterable[CatalogItem] = ()) -> None:
        self.rows: dict[UUID, CatalogItem] = {item.id: item for item in clone_items(items)}
        self.update_calls: list[tuple[UUID, dict[str, Any]]] = []
        self.list_calls = 0
        self.fail_ids: dict[UUID, str] = {}
        self.fail_reads = False
        self.on_update: Callable[[UUID], None] | None = None

    async def list_items(self) -> list[CatalogItem]:
        self.list_calls += 1
        if self.fail_reads:
            raise CatalogReadError("catalog unavailable")
        return sorted(clone_items(self.rows.values()), key=lambda item: item.display_order)

    async def update_item(self, item_id: UUID, fields: Mapping[str, Any]) -> None:
        self.update_calls.append((item_id, dict(fields)))
        if self.on_update is not None:
            self.on_update(item_id)
        if item_id in self.fail_ids:
            raise CatalogWriteError(item_id, self.fail_ids[item_id])
        row = self.rows.get(item_id)
        if row is None:
            raise CatalogWriteError(item_id, "not_found")
        for name, value in fields.items():
            setattr(row, name, value)

    @property
    def written_ids(self) -> list[UUID]:
        return [item_id for item_id, _ in self.update_calls]


@pytest.fixture
def gateway_factory() -> Callable[..., FakeCatalogGateway]:
    return FakeCatalogGateway


@pytest.fixture
def observability() -> CurationObservabilityStore:
    return CurationObservabilityStore()
