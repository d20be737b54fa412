from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from rewardops_api.domain.curation import SponsorshipStatus, SponsorshipTerms, SponsorshipValidationError, derive_status
from rewardops_api.domain.curation.sponsorship import (
    is_expiring_soon,
    is_sponsorship_visible,
    status_badge,
    status_label,
)


NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


def _sponsored(make_item, **overrides):
    values = {
        "sponsor_enabled": True,
        "sponsor_name": "Acme",
        "sponsor_logo": "https://cdn.example.com/acme.png",
        "sponsor_start_date": NOW - timedelta(days=1),
        "sponsor_end_date": NOW + timedelta(days=30),
    }
    values.update(overrides)
    return make_item(1, **values)


def test_disabled_sponsor_flag_reports_none(make_item) -> None:
    item = _sponsored(make_item, sponsor_enabled=False)
    assert derive_status(item, NOW) is SponsorshipStatus.NONE


def test_missing_sponsor_name_reports_none(make_item) -> None:
    assert derive_status(_sponsored(make_item, sponsor_name=None), NOW) is SponsorshipStatus.NONE
    assert derive_status(_sponsored(make_item, sponsor_name=""), NOW) is SponsorshipStatus.NONE


def test_future_start_reports_scheduled(make_item) -> None:
    item = _sponsored(
        make_item,
        sponsor_start_date=NOW + timedelta(days=1),
        sponsor_end_date=NOW + timedelta(days=7),
    )
    assert derive_status(item, NOW) is SponsorshipStatus.SCHEDULED


def test_open_window_reports_active(make_item) -> None:
    assert derive_status(_sponsored(make_item), NOW) is SponsorshipStatus.ACTIVE


def test_missing_dates_are_unbounded(make_item) -> None:
    item = _sponsored(make_item, sponsor_start_date=None, sponsor_end_date=None)
    assert derive_status(item, NOW) is SponsorshipStatus.ACTIVE


def test_past_end_reports_ended(make_item) -> None:
    item = _sponsored(
        make_item,
        sponsor_start_date=NOW - timedelta(days=10),
        sponsor_end_date=NOW - timedelta(seconds=1),
    )
    assert derive_status(item, NOW) is SponsorshipStatus.ENDED


def test_inactive_item_reports_disabled(make_item) -> None:
    item = _sponsored(make_item, is_active=False)
    assert derive_status(item, NOW) is SponsorshipStatus.DISABLED


def test_inverted_window_always_reports_ended(make_item) -> None:
    item = _sponsored(
        make_item,
        sponsor_start_date=NOW + timedelta(days=5),
        sponsor_end_date=NOW + timedelta(days=1),
    )
    assert derive_status(item, NOW) is SponsorshipStatus.ENDED
    item.is_active = False
    assert derive_status(item, NOW) is SponsorshipStatus.ENDED


def test_status_changes_with_wall_clock_only(make_item) -> None:
    item = _sponsored(
        make_item,
        sponsor_start_date=NOW + timedelta(minutes=5),
        sponsor_end_date=NOW + timedelta(days=1),
    )
    assert derive_status(item, NOW) is derive_status(item, NOW)
    assert derive_status(item, NOW) is SponsorshipStatus.SCHEDULED
    assert derive_status(item, NOW + timedelta(minutes=10)) is SponsorshipStatus.ACTIVE


def test_naive_datetimes_are_treated_as_utc(make_item) -> None:
    item = _sponsored(
        make_item,
        sponsor_start_date=datetime(2026, 10, 17),
        sponsor_end_date=datetime(2026, 10, 20),
    )
    assert derive_status(item, NOW) is SponsorshipStatus.SCHEDULED


def test_every_status_has_label_and_badge() -> None:
    for status in SponsorshipStatus:
        assert status_label(status)
        assert status_badge(status)
    assert status_label(SponsorshipStatus.DISABLED) == "Paused"


def test_sponsorship_visible_only_while_active(make_item) -> None:
    assert is_sponsorship_visible(_sponsored(make_item), NOW)
    assert not is_sponsorship_visible(_sponsored(make_item, is_active=False), NOW)


def test_expiring_soon_within_window(make_item) -> None:
    expiring = _sponsored(make_item, sponsor_end_date=NOW + timedelta(days=3))
    distant = _sponsored(make_item, sponsor_end_date=NOW + timedelta(days=30))

    assert is_expiring_soon(expiring, NOW)
    assert not is_expiring_soon(distant, NOW)
    assert is_expiring_soon(distant, NOW, timedelta(days=31))


def test_terms_validation_lists_every_missing_field() -> None:
    terms = SponsorshipTerms(name=" ", logo=None, start_date=None, end_date=None)

    with pytest.raises(SponsorshipValidationError) as excinfo:
        terms.validate()

    assert len(excinfo.value.errors) == 4


def test_terms_reject_inverted_window() -> None:
    terms = SponsorshipTerms(
        name="Acme",
        logo="logo.png",
        start_date=NOW + timedelta(days=2),
        end_date=NOW,
    )
    assert terms.validation_errors() == ["Sponsorship end date must not be before the start date"]


def test_terms_allow_same_day_window() -> None:
    terms = SponsorshipTerms(name="Acme", logo="logo.png", start_date=NOW, end_date=NOW, link=" https://acme.test ")
    terms.validate()
    fields = terms.as_fields()
    assert fields["sponsor_enabled"] is True
    assert fields["sponsor_link"] == "https://acme.test"


def test_terms_normalize_offset_dates_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    terms = SponsorshipTerms(
        name="Acme",
        logo="acme.png",
        start_date=datetime(2026, 10, 20, 0, 0, tzinfo=plus_two),
        end_date=datetime(2026, 10, 20, 9, 30),
    )

    fields = terms.as_fields()

    assert fields["sponsor_start_date"] == datetime(2026, 10, 19, 22, 0, tzinfo=timezone.utc)
    assert fields["sponsor_start_date"].utcoffset() == timedelta(0)
    assert fields["sponsor_end_date"] == datetime(2026, 10, 20, 9, 30, tzinfo=timezone.utc)
