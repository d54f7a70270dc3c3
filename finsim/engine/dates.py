"""Calendar helpers shared by the simulation engine.

All dates are local calendar dates (``datetime.date``); there is no time of
day and no timezone. Strings use the ``YYYY-MM-DD`` form.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

DateLike = Union[str, date]


def parse_date(value: DateLike) -> date:
    """Parse a ``YYYY-MM-DD`` string (or pass a ``date`` through).

    A ``datetime`` is reduced to its calendar date.

    Raises
    ------
    ValueError
        If the value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid date string: {value!r}") from exc


def try_parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Like :func:`parse_date` but returns ``None`` for empty or bad input."""
    if value is None or value == "":
        return None
    try:
        return parse_date(value)
    except ValueError:
        return None


def format_date(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def clamped_day(anchor: date, day: date) -> int:
    """Day of ``day``'s month matching ``anchor``, clamped to the month end.

    An anchor on the 31st maps to the 28th/29th in February and the 30th in
    April, June, September and November.
    """
    return min(anchor.day, days_in_month(day))


def is_anchor_day(anchor: date, day: date) -> bool:
    return day.day == clamped_day(anchor, day)


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    return (end - start).days


def months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def iter_days(start: date, end: date, limit: Optional[int] = None) -> Iterator[date]:
    """Yield each day from ``start`` to ``end`` inclusive.

    With a ``limit`` at most that many days are produced.
    """
    current = start
    count = 0
    while current <= end and (limit is None or count < limit):
        yield current
        current += timedelta(days=1)
        count += 1
