"""Tests for the weekly password period (ISO week in a business time zone)."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from adminpass.domain.value_objects import PasswordPeriod, weekly_period


def test_weekly_period_key_and_bounds_in_utc() -> None:
    period = weekly_period(datetime(2024, 3, 6, 9, 30, tzinfo=UTC))
    assert period.key == "2024-W10"
    assert period.starts_at == datetime(2024, 3, 4, tzinfo=UTC)
    assert period.expires_at == datetime(2024, 3, 11, tzinfo=UTC)


def test_monday_midnight_starts_a_new_period() -> None:
    before = weekly_period(datetime(2024, 3, 10, 23, 59, 59, tzinfo=UTC))
    at = weekly_period(datetime(2024, 3, 11, 0, 0, tzinfo=UTC))
    assert before.key == "2024-W10"
    assert at.key == "2024-W11"
    assert before.expires_at == at.starts_at


def test_iso_year_differs_from_calendar_year() -> None:
    """2021-01-01 (Friday) belongs to ISO week 53 of 2020."""
    assert weekly_period(datetime(2021, 1, 1, 12, tzinfo=UTC)).key == "2020-W53"
    assert weekly_period(datetime(2024, 12, 30, tzinfo=UTC)).key == "2025-W01"


def test_business_timezone_shifts_the_boundary() -> None:
    """Sunday 20:00 UTC is already Monday in Nairobi (UTC+3)."""
    nairobi = ZoneInfo("Africa/Nairobi")
    moment = datetime(2024, 3, 10, 22, 0, tzinfo=UTC)
    assert weekly_period(moment).key == "2024-W10"
    local = weekly_period(moment, nairobi)
    assert local.key == "2024-W11"
    assert local.starts_at == datetime(2024, 3, 10, 21, 0, tzinfo=UTC)


def test_week_spanning_dst_change_is_not_seven_utc_days() -> None:
    berlin = ZoneInfo("Europe/Berlin")
    period = weekly_period(datetime(2024, 3, 27, 12, tzinfo=UTC), berlin)
    assert period.key == "2024-W13"
    assert period.expires_at - period.starts_at == timedelta(days=7, hours=-1)


def test_contains_is_half_open() -> None:
    period = PasswordPeriod.from_key("2024-W10")
    assert period.contains(period.starts_at)
    assert not period.contains(period.expires_at)
    assert period.contains(period.expires_at - timedelta(microseconds=1))


def test_remaining_seconds_never_negative() -> None:
    period = PasswordPeriod.from_key("2024-W10")
    assert period.remaining_seconds(period.expires_at - timedelta(seconds=90)) == 90
    assert period.remaining_seconds(period.expires_at + timedelta(days=1)) == 0


def test_from_key_matches_weekly_period() -> None:
    now = datetime(2024, 3, 6, 9, 30, tzinfo=UTC)
    assert PasswordPeriod.from_key("2024-W10") == weekly_period(now)


@pytest.mark.parametrize("key", ["2024-10", "2024-W1", "24-W10", "2024-W54", ""])
def test_from_key_rejects_bad_keys(key: str) -> None:
    with pytest.raises(ValueError):
        PasswordPeriod.from_key(key)


def test_period_must_end_after_start() -> None:
    start = datetime(2024, 3, 4, tzinfo=UTC)
    with pytest.raises(ValueError, match="end after"):
        PasswordPeriod(key="2024-W10", starts_at=start, expires_at=start)
