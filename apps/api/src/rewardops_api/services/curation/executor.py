"""Bulk command execution and write-through stock adjustments."""

from __future__ import annotations

from typing import Iterable, Sequence
from uuid import UUID

from loguru import logger

from rewardops_api.domain.curation.bulk import (
    BulkActionKind,
    BulkFailure,
    BulkOperation,
    BulkOperationResult,
    RowWrite,
    ordered_selection,
)
from rewardops_api.domain.curation.errors import (
    CatalogReadError,
    CatalogWriteError,
    CurationValidationError,
    SelectionTooLargeError,
)
from rewardops_api.domain.curation.stock import adjusted_stock, exact_stock
from rewardops_api.domain.curation.store import CatalogSnapshot
from rewardops_api.observability.curation import CurationObservabilityStore, get_curation_store
from rewardops_api.observability.tracing import get_curation_tracer
from rewardops_api.services.curation.gateway import RewardCatalogGateway


class BulkActionExecutor:
    """Run a bulk command as independent single-row writes.

    Each write settles (success or failure) before the next is issued and one
    failure never stops its siblings. Once the batch has settled the snapshot
    is reloaded from the gateway so callers see persisted state, not the
    state the command was expected to produce.
    """

    def __init__(
        self,
        gateway: RewardCatalogGateway,
        snapshot: CatalogSnapshot,
        *,
        max_selection: int | None = None,
        observability: CurationObservabilityStore | None = None,
    ) -> None:
        self._gateway = gateway
        self._snapshot = snapshot
        self._max_selection = max_selection
        self._observability = observability or get_curation_store()
        self._tracer = get_curation_tracer()

    async def apply(self, selection: Iterable[UUID], operation: BulkOperation) -> BulkOperationResult:
        kind = BulkActionKind(operation.kind)
        ids = ordered_selection(selection, self._snapshot.ids())

        if kind is not BulkActionKind.ORDER_COMMIT and self._max_selection is not None:
            if len(ids) > self._max_selection:
                self._observability.record_validation_rejection(kind.value)
                raise SelectionTooLargeError(
                    f"Bulk selection of {len(ids)} exceeds the limit of {self._max_selection}"
                )

        try:
            writes = operation.plan(ids)
        except CurationValidationError as exc:
            self._observability.record_validation_rejection(kind.value)
            logger.info(
                "Bulk command rejected before any write",
                operation=kind.value,
                selection_size=len(ids),
                errors=exc.errors,
            )
            raise

        return await self.run_writes(kind, writes)

    async def run_writes(self, kind: BulkActionKind, writes: Sequence[RowWrite]) -> BulkOperationResult:
        result = BulkOperationResult(operation=kind, requested=[write.item_id for write in writes])
        if not writes:
            return result

        with self._tracer.start_as_current_span(
            "curation.bulk",
            attributes={"curation.operation": kind.value, "curation.requested": len(writes)},
        ):
            for write in writes:
                try:
                    await self._gateway.update_item(write.item_id, write.fields)
                except CatalogWriteError as exc:
                    result.failed.append(BulkFailure(write.item_id, exc.reason))
                except Exception as exc:
                    logger.exception(
                        "Unexpected gateway error during bulk write",
                        item_id=str(write.item_id),
                        operation=kind.value,
                        error=str(exc),
                    )
                    result.failed.append(BulkFailure(write.item_id, exc.__class__.__name__))
                else:
                    result.succeeded.append(write.item_id)

            result.refreshed = await self.refresh()

        self._observability.record_bulk_run(
            kind.value,
            succeeded=result.succeeded_count,
            failed=result.failed_count,
            reasons=[failure.reason for failure in result.failed],
        )
        log = logger.bind(summary=result.summary())
        if result.failed:
            log.warning(
                "Bulk command finished with failures",
                failed_ids=[str(item_id) for item_id in result.failed_ids()],
            )
        else:
            log.info("Bulk command completed")
        return result

    async def refresh(self) -> bool:
        try:
            items = await self._gateway.list_items()
        except CatalogReadError:
            logger.exception("Catalog refresh after bulk command failed")
            return False
        self._snapshot.load(items)
        return True

    async def adjust_stock(self, item_id: UUID, delta: int) -> int | None:
        item = self._snapshot.get(item_id)
        return await self._write_stock(item_id, adjusted_stock(item, delta))

    async def set_stock(self, item_id: UUID, value: int | None) -> int | None:
        self._snapshot.get(item_id)
        return await self._write_stock(item_id, exact_stock(value))

    async def _write_stock(self, item_id: UUID, stock: int | None) -> int | None:
        # Stock guards against over-claiming, so it is written immediately
        # instead of being staged with the rest of the session's edits.
        try:
            await self._gateway.update_item(item_id, {"stock_quantity": stock})
        except CatalogWriteError:
            self._observability.record_stock_adjustment(succeeded=False)
            await self.refresh()
            raise
        self._snapshot.patch(item_id, stock_quantity=stock)
        self._observability.record_stock_adjustment(succeeded=True)
        logger.info("Reward stock updated", item_id=str(item_id), stock_quantity=stock)
        return stock


__all__ = ["BulkActionExecutor"]
