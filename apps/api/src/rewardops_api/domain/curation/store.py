"""Current/baseline pair for one curation session."""

from __future__ import annotations

from typing import Iterable
from uuid import UUID

from .errors import CatalogItemNotFoundError
from .items import CatalogItem, clone_items, index_by_id
from .ordering import OrderChange, diff_orders, normalize, sort_by_display_order


class CatalogSnapshot:
    """Live catalog plus the last state confirmed persisted.

    Changed items are always derived by comparing the two lists; nothing
    tracks "dirty" rows separately.
    """

    def __init__(self, items: Iterable[CatalogItem] = ()) -> None:
        self._baseline: list[CatalogItem] = []
        self._current: list[CatalogItem] = []
        self.load(items)

    @property
    def current(self) -> list[CatalogItem]:
        return list(self._current)

    @property
    def baseline(self) -> list[CatalogItem]:
        return list(self._baseline)

    def __len__(self) -> int:
        return len(self._current)

    def ids(self) -> list[UUID]:
        return [item.id for item in sort_by_display_order(self._current)]

    def get(self, item_id: UUID) -> CatalogItem:
        for item in self._current:
            if item.id == item_id:
                return item
        raise CatalogItemNotFoundError(item_id)

    def find(self, item_id: UUID) -> CatalogItem | None:
        return next((item for item in self._current if item.id == item_id), None)

    def load(self, items: Iterable[CatalogItem]) -> None:
        """Adopt freshly fetched rows as both baseline and working copy.

        The baseline keeps persisted positions verbatim; the working copy is
        densified, so rows stored with gaps or duplicates show up as pending
        order changes until the next save.
        """

        fetched = sort_by_display_order(items)
        self._baseline = clone_items(fetched)
        self._current = clone_items(normalize(fetched))

    def set_current(self, items: Iterable[CatalogItem]) -> None:
        # Local edits always land dense; callers pass reconciler output.
        self._current = normalize(items)

    def discard(self) -> None:
        self._current = clone_items(normalize(self._baseline))

    def order_changes(self) -> list[OrderChange]:
        return diff_orders(self._current, self._baseline)

    def active_flag_changes(self) -> dict[UUID, bool]:
        previous = index_by_id(self._baseline)
        changes: dict[UUID, bool] = {}
        for item in self._current:
            original = previous.get(item.id)
            if original is None or original.is_active != item.is_active:
                changes[item.id] = item.is_active
        return changes

    def has_changes(self) -> bool:
        if len(self._current) != len(self._baseline):
            return True
        return bool(self.order_changes() or self.active_flag_changes())

    def patch(self, item_id: UUID, **fields: object) -> None:
        """Apply a write that is already persisted to both lists."""

        for collection in (self._current, self._baseline):
            for item in collection:
                if item.id == item_id:
                    for name, value in fields.items():
                        setattr(item, name, value)

    def purge(self, item_id: UUID) -> bool:
        before = len(self._current) + len(self._baseline)
        self._current = normalize(item for item in self._current if item.id != item_id)
        # Baseline keeps the persisted gaps so the next save closes them.
        self._baseline = [item for item in self._baseline if item.id != item_id]
        return len(self._current) + len(self._baseline) != before


__all__ = ["CatalogSnapshot"]
