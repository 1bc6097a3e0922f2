"""Daily / monthly / quarterly / yearly filtering of record listings."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Iterable, Optional, TypeVar

from .dates import is_canonical_date, normalize_date

T = TypeVar("T")


class Period(str, Enum):
    ALL = "all"
    DAILY = "daily"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


def _quarter(month: int) -> int:
    return (month - 1) // 3


def record_day(record) -> Optional[date]:
    """Return the civil date of ``record.date``, or ``None`` if unusable."""
    key = normalize_date(getattr(record, "date", ""))
    if not is_canonical_date(key):
        return None
    try:
        return date.fromisoformat(key)
    except ValueError:
        return None


def in_period(day: date, period: Period, reference: date) -> bool:
    if period is Period.DAILY:
        return day == reference
    if period is Period.MONTHLY:
        return (day.year, day.month) == (reference.year, reference.month)
    if period is Period.QUARTERLY:
        return (day.year, _quarter(day.month)) == (reference.year, _quarter(reference.month))
    if period is Period.YEARLY:
        return day.year == reference.year
    return True


def filter_by_period(records: Iterable[T], period: Period | str, reference: Optional[date] = None) -> list[T]:
    """Keep the records dated in the same period as ``reference`` (today)."""
    period = Period(period)
    if period is Period.ALL:
        return list(records)
    reference = reference or date.today()
    kept = []
    for record in records:
        day = record_day(record)
        if day is not None and in_period(day, period, reference):
            kept.append(record)
    return kept
