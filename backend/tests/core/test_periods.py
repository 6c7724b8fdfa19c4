"""Reporting periods — half-open ranges from date/month parameters."""

from datetime import date, datetime, timezone

import pytest

from backoffice.core.errors import ValidationError
from backoffice.core.periods import parse_day, parse_month, resolve_period


def test_day_period():
    period = parse_day("2026-03-05")
    assert (period.start, period.end) == (date(2026, 3, 5), date(2026, 3, 6))
    assert period.start_at == datetime(2026, 3, 5, tzinfo=timezone.utc)


def test_month_period_is_half_open():
    period = parse_month("2026-02")
    assert period.contains(date(2026, 2, 1))
    assert period.contains(date(2026, 2, 28))
    assert not period.contains(date(2026, 3, 1))
    assert not period.contains(None)


def test_december_rolls_into_next_year():
    assert parse_month("2025-12").end == date(2026, 1, 1)


def test_contains_accepts_datetimes():
    assert parse_day("2026-03-05").contains(datetime(2026, 3, 5, 23, 59))


@pytest.mark.parametrize("raw", ["2026-13", "2026", "march", "2026-00"])
def test_bad_month(raw):
    with pytest.raises(ValidationError):
        parse_month(raw)


def test_bad_day():
    with pytest.raises(ValidationError):
        parse_day("2026-02-30")


def test_resolve_period():
    assert resolve_period(None, None) is None
    assert resolve_period("2026-03-05", None).label == "2026-03-05"
    assert resolve_period(None, "2026-03").label == "2026-03"
    with pytest.raises(ValidationError):
        resolve_period("2026-03-05", "2026-03")
    with pytest.raises(ValidationError, match="'date' or 'month' is required"):
        resolve_period(None, None, required=True)
