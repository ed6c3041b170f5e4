"""Calendar helpers for sprint timeboxes."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

# ISO weekdays: Monday is 1, Saturday 6, Sunday 7.
WEEKEND = frozenset({6, 7})


def as_date(value: date | datetime | str | None) -> date | None:
    """Reduce a date, datetime or ISO string to a plain calendar date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value).date()


def working_days(start, end) -> int:
    """Count the weekdays in the inclusive range ``[start, end]``.

    Returns 0 when either bound is missing or ``start`` falls after ``end``.
    """
    begin, finish = as_date(start), as_date(end)
    if begin is None or finish is None or begin > finish:
        return 0

    total = 0
    weekends = 0
    day = begin
    while day <= finish:
        total += 1
        if day.isoweekday() in WEEKEND:
            weekends += 1
        day += timedelta(days=1)
    return total - weekends


def weeks(start, end) -> int:
    """Whole weeks between two dates, rounded half-up."""
    begin, finish = as_date(start), as_date(end)
    if begin is None or finish is None:
        return 0
    days = abs((finish - begin).days)
    return int((Decimal(days) / 7).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
