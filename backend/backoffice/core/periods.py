"""Reporting Periods — `date=YYYY-MM-DD` / `month=YYYY-MM` into half-open ranges.

Invariants:
    - Every range is half-open: start <= x < end
    - Datetime ranges are UTC-aware
    - Exactly one of date/month; both or neither is a ValidationError
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from backoffice.core.errors import ValidationError


@dataclass(frozen=True)
class Period:
    label: str
    start: date
    end: date  # exclusive

    @property
    def start_at(self) -> datetime:
        return datetime.combine(self.start, time.min, tzinfo=timezone.utc)

    @property
    def end_at(self) -> datetime:
        return datetime.combine(self.end, time.min, tzinfo=timezone.utc)

    def contains(self, day: date | None) -> bool:
        if day is None:
            return False
        if isinstance(day, datetime):
            day = day.date()
        return self.start <= day < self.end


def parse_day(raw: str) -> Period:
    try:
        day = date.fromisoformat(raw)
    except ValueError:
        raise ValidationError(f"Invalid date '{raw}', expected YYYY-MM-DD", field="date")
    return Period(label=raw, start=day, end=day + timedelta(days=1))


def parse_month(raw: str) -> Period:
    try:
        year_s, month_s = raw.split("-")
        first = date(int(year_s), int(month_s), 1)
    except ValueError:
        raise ValidationError(f"Invalid month '{raw}', expected YYYY-MM", field="month")
    if first.month == 12:
        following = date(first.year + 1, 1, 1)
    else:
        following = date(first.year, first.month + 1, 1)
    return Period(label=raw, start=first, end=following)


def resolve_period(
    day: str | None, month: str | None, required: bool = False,
) -> Period | None:
    """Pick the period described by the date/month query parameters."""
    if day and month:
        raise ValidationError("Use either date or month, not both")
    if day:
        return parse_day(day)
    if month:
        return parse_month(month)
    if required:
        raise ValidationError("Query parameter 'date' or 'month' is required")
    return None
