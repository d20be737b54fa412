"""Exceptions raised by the catalog curation engine."""

from __future__ import annotations

from typing import Sequence
from uuid import UUID


class CurationError(RuntimeError):
    """Base exception for catalog curation failures."""


class CurationValidationError(CurationError):
    """Raised before any write when a command carries invalid input."""

    def __init__(self, message: str, errors: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [message])


class SponsorshipValidationError(CurationValidationError):
    """Sponsorship terms are incomplete or describe an inverted window."""


class TierPricingValidationError(CurationValidationError):
    """Per-tier claim costs violate the pricing ladder."""


class StockValidationError(CurationValidationError):
    """Requested stock level is not a non-negative integer."""


class SelectionTooLargeError(CurationValidationError):
    """Bulk selection exceeds the configured ceiling."""


class OrderModeError(CurationError):
    """Order edits were attempted while the session is not in ordering mode."""


class CatalogItemNotFoundError(CurationError):
    """The referenced item is not part of the loaded catalog."""

    def __init__(self, item_id: UUID) -> None:
        super().__init__(f"Catalog item {item_id} is not loaded")
        self.item_id = item_id


class CatalogWriteError(CurationError):
    """A single-row write was rejected by the persistence boundary."""

    def __init__(self, item_id: UUID, reason: str) -> None:
        super().__init__(f"Write for catalog item {item_id} failed: {reason}")
        self.item_id = item_id
        self.reason = reason


class CatalogReadError(CurationError):
    """The persistence boundary could not return the catalog."""


__all__ = [
    "CatalogItemNotFoundError",
    "CatalogReadError",
    "CatalogWriteError",
    "CurationError",
    "CurationValidationError",
    "OrderModeError",
    "SelectionTooLargeError",
    "SponsorshipValidationError",
    "StockValidationError",
    "TierPricingValidationError",
]
