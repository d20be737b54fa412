"""Sponsorship lifecycle derivation.

Status is never stored. Every read recomputes it from the item's sponsorship
fields and the supplied wall-clock time, so the same row can legitimately
report ``scheduled`` in the morning and ``active`` in the afternoon.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from .errors import SponsorshipValidationError
from .items import CatalogItem


DEFAULT_EXPIRING_WINDOW = timedelta(days=7)


class SponsorshipStatus(str, Enum):
    """Derived sponsorship lifecycle states."""

    NONE = "none"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    ENDED = "ended"
    DISABLED = "disabled"


_STATUS_LABELS: dict[SponsorshipStatus, str] = {
    SponsorshipStatus.NONE: "None",
    SponsorshipStatus.SCHEDULED: "Scheduled",
    SponsorshipStatus.ACTIVE: "Active",
    SponsorshipStatus.ENDED: "Ended",
    SponsorshipStatus.DISABLED: "Paused",
}

_STATUS_BADGES: dict[SponsorshipStatus, str] = {
    SponsorshipStatus.NONE: "outline",
    SponsorshipStatus.SCHEDULED: "secondary",
    SponsorshipStatus.ACTIVE: "default",
    SponsorshipStatus.ENDED: "muted",
    SponsorshipStatus.DISABLED: "warning",
}

if set(_STATUS_LABELS) != set(SponsorshipStatus) or set(_STATUS_BADGES) != set(SponsorshipStatus):
    raise RuntimeError("Sponsorship status presentation tables must cover every status")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def derive_status(item: CatalogItem, now: datetime) -> SponsorshipStatus:
    """Derive the sponsorship state of ``item`` at ``now``.

    An item that is switched off by an admin while its sponsorship is still
    configured reports ``disabled`` rather than ``none``. An inverted window
    (end before start) always reports ``ended``.
    """

    if not item.sponsor_enabled or not item.sponsor_name:
        return SponsorshipStatus.NONE

    start = _as_utc(item.sponsor_start_date) if item.sponsor_start_date else None
    end = _as_utc(item.sponsor_end_date) if item.sponsor_end_date else None

    if start is not None and end is not None and end < start:
        return SponsorshipStatus.ENDED

    if not item.is_active:
        return SponsorshipStatus.DISABLED

    current = _as_utc(now)

    if start is not None and current < start:
        return SponsorshipStatus.SCHEDULED

    if end is not None and current > end:
        return SponsorshipStatus.ENDED

    return SponsorshipStatus.ACTIVE


def status_label(status: SponsorshipStatus) -> str:
    return _STATUS_LABELS[status]


def status_badge(status: SponsorshipStatus) -> str:
    return _STATUS_BADGES[status]


def is_sponsorship_visible(item: CatalogItem, now: datetime) -> bool:
    """Members only see sponsor attribution while the window is active."""

    return derive_status(item, now) is SponsorshipStatus.ACTIVE


def is_expiring_soon(
    item: CatalogItem,
    now: datetime,
    window: timedelta = DEFAULT_EXPIRING_WINDOW,
) -> bool:
    if derive_status(item, now) is not SponsorshipStatus.ACTIVE or item.sponsor_end_date is None:
        return False
    return _as_utc(item.sponsor_end_date) <= _as_utc(now) + window


@dataclass(frozen=True)
class SponsorshipTerms:
    """Sponsorship configuration applied to a selection of rewards."""

    name: str | None
    logo: str | None
    start_date: datetime | None
    end_date: datetime | None
    link: str | None = None

    def validation_errors(self) -> list[str]:
        errors: list[str] = []
        if not (self.name or "").strip():
            errors.append("Sponsor name is required")
        if not (self.logo or "").strip():
            errors.append("Sponsor logo is required")
        if self.start_date is None:
            errors.append("Sponsorship start date is required")
        if self.end_date is None:
            errors.append("Sponsorship end date is required")
        if (
            self.start_date is not None
            and self.end_date is not None
            and _as_utc(self.end_date) < _as_utc(self.start_date)
        ):
            errors.append("Sponsorship end date must not be before the start date")
        return errors

    def validate(self) -> None:
        errors = self.validation_errors()
        if errors:
            raise SponsorshipValidationError("Invalid sponsorship terms", errors)

    def as_fields(self) -> dict[str, Any]:
        return {
            "sponsor_enabled": True,
            "sponsor_name": (self.name or "").strip(),
            "sponsor_logo": (self.logo or "").strip(),
            "sponsor_link": self.link.strip() if self.link else None,
            "sponsor_start_date": _as_utc(self.start_date) if self.start_date else None,
            "sponsor_end_date": _as_utc(self.end_date) if self.end_date else None,
        }


SPONSORSHIP_CLEARED_FIELDS: dict[str, Any] = {
    "sponsor_enabled": False,
    "sponsor_name": None,
    "sponsor_logo": None,
    "sponsor_link": None,
    "sponsor_start_date": None,
    "sponsor_end_date": None,
}


__all__ = [
    "DEFAULT_EXPIRING_WINDOW",
    "SPONSORSHIP_CLEARED_FIELDS",
    "SponsorshipStatus",
    "SponsorshipTerms",
    "derive_status",
    "is_expiring_soon",
    "is_sponsorship_visible",
    "status_badge",
    "status_label",
]
