"""Reward catalog curation: ordering, sponsorship lifecycle, filtering and bulk commands."""

from .bulk import BulkActionKind, BulkFailure, BulkOperation, BulkOperationResult, RowWrite
from .errors import (
    CatalogItemNotFoundError,
    CatalogReadError,
    CatalogWriteError,
    CurationError,
    CurationValidationError,
    OrderModeError,
    SelectionTooLargeError,
    SponsorshipValidationError,
    StockValidationError,
    TierPricingValidationError,
)
from .items import CatalogItem, RewardCategory, StatusTier
from .ordering import MoveDirection, MovePosition, OrderChange, diff_orders, move_item, move_selected, reorder
from .selection import SelectionSet
from .sponsorship import SponsorshipStatus, SponsorshipTerms, derive_status
from .store import CatalogSnapshot
from .views import CatalogBucket, CatalogFilters, SortDirection, SortField, SortSpec, TierFilter, build_view

__all__ = [
    "BulkActionKind",
    "BulkFailure",
    "BulkOperation",
    "BulkOperationResult",
    "CatalogBucket",
    "CatalogFilters",
    "CatalogItem",
    "CatalogItemNotFoundError",
    "CatalogReadError",
    "CatalogSnapshot",
    "CatalogWriteError",
    "CurationError",
    "CurationValidationError",
    "MoveDirection",
    "MovePosition",
    "OrderChange",
    "OrderModeError",
    "RewardCategory",
    "RowWrite",
    "SelectionSet",
    "SelectionTooLargeError",
    "SortDirection",
    "SortField",
    "SortSpec",
    "SponsorshipStatus",
    "SponsorshipTerms",
    "SponsorshipValidationError",
    "StatusTier",
    "StockValidationError",
    "TierFilter",
    "TierPricingValidationError",
    "build_view",
    "derive_status",
    "diff_orders",
    "move_item",
    "move_selected",
    "reorder",
]
