"""Explicit curation engine instance for one admin view."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable
from uuid import UUID

from loguru import logger

from rewardops_api.domain.curation.bulk import (
    BulkActionKind,
    BulkOperation,
    BulkOperationResult,
    RowWrite,
)
from rewardops_api.domain.curation.errors import OrderModeError
from rewardops_api.domain.curation.items import CatalogItem
from rewardops_api.domain.curation.ordering import (
    MoveDirection,
    MovePosition,
    OrderChange,
    move_item,
    move_selected,
    reorder,
)
from rewardops_api.domain.curation.selection import SelectionSet
from rewardops_api.domain.curation.sponsorship import (
    DEFAULT_EXPIRING_WINDOW,
    SponsorshipStatus,
    derive_status,
    is_expiring_soon,
)
from rewardops_api.domain.curation.store import CatalogSnapshot
from rewardops_api.domain.curation.views import CatalogFilters, SortSpec, build_view
from rewardops_api.observability.curation import CurationObservabilityStore
from rewardops_api.services.curation.executor import BulkActionExecutor
from rewardops_api.services.curation.gateway import RewardCatalogGateway


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CurationSession:
    """Owns the snapshot, the selection and the ordering-mode flag.

    Reordering, filtering and selection are synchronous; only ``load``,
    ``save``, ``apply_bulk`` and the stock writes await the gateway.
    """

    def __init__(
        self,
        gateway: RewardCatalogGateway,
        *,
        max_selection: int | None = None,
        expiring_window: timedelta = DEFAULT_EXPIRING_WINDOW,
        observability: CurationObservabilityStore | None = None,
    ) -> None:
        self.snapshot = CatalogSnapshot()
        self.selection = SelectionSet()
        self.filters = CatalogFilters()
        self.sort = SortSpec()
        self.expiring_window = expiring_window
        self._gateway = gateway
        self._order_mode = False
        self._executor = BulkActionExecutor(
            gateway,
            self.snapshot,
            max_selection=max_selection,
            observability=observability,
        )

    @property
    def order_mode(self) -> bool:
        return self._order_mode

    @property
    def executor(self) -> BulkActionExecutor:
        return self._executor

    async def load(self) -> list[CatalogItem]:
        """Replace both snapshots with persisted state.

        Unlike the refresh that follows a bulk command, a failed initial read
        propagates as ``CatalogReadError``.
        """

        self.snapshot.load(await self._gateway.list_items())
        self.selection.retain(self.snapshot.ids())
        return self.snapshot.current

    def enter_order_mode(self) -> None:
        self._order_mode = True

    def exit_order_mode(self) -> None:
        self._order_mode = False

    def set_filters(self, filters: CatalogFilters) -> None:
        # Filters hide rows; they never touch the selection.
        self.filters = filters

    def set_sort(self, sort: SortSpec) -> None:
        self.sort = sort

    def view(self) -> list[CatalogItem]:
        return build_view(self.snapshot.current, self.filters, self.sort, order_mode=self._order_mode)

    def visible_ids(self) -> list[UUID]:
        return [item.id for item in self.view()]

    def toggle_select_all(self) -> None:
        self.selection.toggle_all(self.visible_ids())

    def sponsorship_status(self, item_id: UUID, now: datetime | None = None) -> SponsorshipStatus:
        return derive_status(self.snapshot.get(item_id), now or _utcnow())

    def sponsorship_expiring(self, item_id: UUID, now: datetime | None = None) -> bool:
        return is_expiring_soon(self.snapshot.get(item_id), now or _utcnow(), self.expiring_window)

    def _require_order_mode(self, action: str) -> None:
        if not self._order_mode:
            raise OrderModeError(f"{action} is only available in ordering mode")

    def drag(self, dragged_id: UUID, target_id: UUID) -> None:
        self._require_order_mode("Drag reorder")
        if dragged_id == target_id:
            return
        self.snapshot.set_current(reorder(self.snapshot.current, dragged_id, target_id))

    def move(self, item_id: UUID, direction: MoveDirection) -> None:
        self._require_order_mode("Moving a reward")
        self.snapshot.set_current(move_item(self.snapshot.current, item_id, direction))

    def move_selected(self, position: MovePosition) -> None:
        self._require_order_mode("Moving the selection")
        if not self.selection:
            return
        self.snapshot.set_current(move_selected(self.snapshot.current, self.selection.ids, position))
        self.selection.clear()

    def toggle_active(self, item_id: UUID) -> None:
        """Stage an activation flip; persisted by ``save`` with the order."""

        self._require_order_mode("Staging activation changes")
        item = self.snapshot.get(item_id)
        item.is_active = not item.is_active

    def pending_order_changes(self) -> list[OrderChange]:
        return self.snapshot.order_changes()

    def pending_changes(self) -> list[UUID]:
        """Ids whose order or staged activation differs from the baseline."""

        changed = {change.item_id for change in self.snapshot.order_changes()}
        changed.update(self.snapshot.active_flag_changes())
        return [item_id for item_id in self.snapshot.ids() if item_id in changed]

    def has_pending_changes(self) -> bool:
        return self.snapshot.has_changes()

    def discard(self) -> None:
        self.snapshot.discard()
        self.selection.clear()
        logger.info("Curation changes discarded")

    async def save(self) -> BulkOperationResult:
        """Write only the rows whose order or staged activation changed."""

        order_changes = {change.item_id: change.new_order for change in self.snapshot.order_changes()}
        active_changes = self.snapshot.active_flag_changes()

        writes: list[RowWrite] = []
        for item_id in self.snapshot.ids():
            fields: dict[str, object] = {}
            if item_id in order_changes:
                fields["display_order"] = order_changes[item_id]
            if item_id in active_changes:
                fields["is_active"] = active_changes[item_id]
            if fields:
                writes.append(RowWrite(item_id, fields))

        return await self._executor.run_writes(BulkActionKind.ORDER_COMMIT, writes)

    async def apply_bulk(self, operation: BulkOperation) -> BulkOperationResult:
        """Run ``operation`` over the selection.

        The selection survives validation errors and is only cleared once the
        per-item result exists.
        """

        result = await self._executor.apply(self.selection.ids, operation)
        self.selection.clear()
        return result

    async def commit_order(self) -> BulkOperationResult:
        operation = BulkOperation.commit_order(self.snapshot.order_changes())
        return await self._executor.apply((), operation)

    async def adjust_stock(self, item_id: UUID, delta: int) -> int | None:
        return await self._executor.adjust_stock(item_id, delta)

    async def set_stock(self, item_id: UUID, value: int | None) -> int | None:
        return await self._executor.set_stock(item_id, value)

    def purge(self, item_id: UUID) -> None:
        """Forget a row deleted elsewhere in one step."""

        self.snapshot.purge(item_id)
        self.selection.discard(item_id)

    def select(self, ids: Iterable[UUID]) -> None:
        for item_id in ids:
            self.selection.add(item_id)


__all__ = ["CurationSession"]
