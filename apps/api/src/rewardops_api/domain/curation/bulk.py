"""Bulk command descriptors and their per-item outcome report."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence
from uuid import UUID

from .errors import CurationValidationError
from .ordering import OrderChange
from .sponsorship import SPONSORSHIP_CLEARED_FIELDS, SponsorshipTerms
from .tier_pricing import validate_tier_pricing


class BulkActionKind(str, Enum):
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    FEATURE = "feature"
    UNFEATURE = "unfeature"
    SPONSORSHIP_APPLY = "sponsorship_apply"
    SPONSORSHIP_REMOVE = "sponsorship_remove"
    TIER_PRICING_APPLY = "tier_pricing_apply"
    TIER_PRICING_CLEAR = "tier_pricing_clear"
    ORDER_COMMIT = "order_commit"


_TOGGLE_FIELDS: dict[BulkActionKind, dict[str, Any]] = {
    BulkActionKind.ACTIVATE: {"is_active": True},
    BulkActionKind.DEACTIVATE: {"is_active": False},
    BulkActionKind.FEATURE: {"is_featured": True},
    BulkActionKind.UNFEATURE: {"is_featured": False},
    BulkActionKind.SPONSORSHIP_REMOVE: SPONSORSHIP_CLEARED_FIELDS,
    BulkActionKind.TIER_PRICING_CLEAR: {"status_tier_claims_cost": None},
}


@dataclass(frozen=True)
class RowWrite:
    item_id: UUID
    fields: Mapping[str, Any]


@dataclass(frozen=True)
class BulkOperation:
    """A single admin command applied independently to every selected row."""

    kind: BulkActionKind
    sponsorship: SponsorshipTerms | None = None
    tier_pricing: Mapping[str, int | None] | None = None
    order_changes: tuple[OrderChange, ...] = ()

    @classmethod
    def toggle(cls, kind: BulkActionKind | str) -> "BulkOperation":
        return cls(kind=BulkActionKind(kind))

    @classmethod
    def apply_sponsorship(cls, terms: SponsorshipTerms) -> "BulkOperation":
        return cls(kind=BulkActionKind.SPONSORSHIP_APPLY, sponsorship=terms)

    @classmethod
    def remove_sponsorship(cls) -> "BulkOperation":
        return cls(kind=BulkActionKind.SPONSORSHIP_REMOVE)

    @classmethod
    def apply_tier_pricing(cls, pricing: Mapping[str, int | None]) -> "BulkOperation":
        return cls(kind=BulkActionKind.TIER_PRICING_APPLY, tier_pricing=dict(pricing))

    @classmethod
    def commit_order(cls, changes: Iterable[OrderChange]) -> "BulkOperation":
        return cls(kind=BulkActionKind.ORDER_COMMIT, order_changes=tuple(changes))

    def plan(self, selection: Iterable[UUID]) -> list[RowWrite]:
        """Validate the command and expand it into one write per row.

        Raises before returning anything when the command is invalid, so an
        invalid command never produces a partial plan.
        """

        kind = BulkActionKind(self.kind)

        if kind is BulkActionKind.ORDER_COMMIT:
            return [
                RowWrite(change.item_id, {"display_order": change.new_order})
                for change in self.order_changes
            ]

        ids = list(dict.fromkeys(selection))

        if kind is BulkActionKind.SPONSORSHIP_APPLY:
            if self.sponsorship is None:
                raise CurationValidationError("Sponsorship terms are required")
            self.sponsorship.validate()
            fields = self.sponsorship.as_fields()
        elif kind is BulkActionKind.TIER_PRICING_APPLY:
            if self.tier_pricing is None:
                raise CurationValidationError("Tier pricing is required")
            fields = {"status_tier_claims_cost": validate_tier_pricing(self.tier_pricing)}
        else:
            fields = _TOGGLE_FIELDS[kind]

        return [RowWrite(item_id, dict(fields)) for item_id in ids]


@dataclass(frozen=True)
class BulkFailure:
    item_id: UUID
    reason: str


@dataclass
class BulkOperationResult:
    """Per-row outcome of a bulk command; writes are not atomic."""

    operation: BulkActionKind
    requested: list[UUID] = field(default_factory=list)
    succeeded: list[UUID] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)
    refreshed: bool = False

    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def is_complete(self) -> bool:
        return not self.failed

    @property
    def is_partial(self) -> bool:
        return bool(self.failed) and bool(self.succeeded)

    def failed_ids(self) -> list[UUID]:
        return [failure.item_id for failure in self.failed]

    def summary(self) -> dict[str, Any]:
        return {
            "operation": self.operation.value,
            "requested": len(self.requested),
            "succeeded": self.succeeded_count,
            "failed": self.failed_count,
            "refreshed": self.refreshed,
        }


def ordered_selection(selection: Iterable[UUID], order: Sequence[UUID]) -> list[UUID]:
    """Selected ids in catalog order, unknown ids last in sorted order."""

    selected = set(selection)
    catalog = set(order)
    known = [item_id for item_id in order if item_id in selected]
    unknown = sorted(selected - catalog, key=str)
    return known + unknown


__all__ = [
    "BulkActionKind",
    "BulkFailure",
    "BulkOperation",
    "BulkOperationResult",
    "RowWrite",
    "ordered_selection",
]
