"""Month grid construction for the calendar view."""
from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional

from sheets.config import ERA_YEAR_OFFSET

from .events import CalendarEvent, EventCategory

THAI_MONTHS = (
    "มกราคม", "กุมภาพันธ์", "มีนาคม", "เมษายน", "พฤษภาคม", "มิถุนายน",
    "กรกฎาคม", "สิงหาคม", "กันยายน", "ตุลาคม", "พฤศจิกายน", "ธันวาคม",
)
THAI_WEEKDAYS = ("อา", "จ", "อ", "พ", "พฤ", "ศ", "ส")


@dataclass
class CategoryBucket:
    events: list[CalendarEvent] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.events)


@dataclass
class CalendarGridCell:
    day_number: int
    belongs_to_current_month: bool
    date: str
    is_today: bool = False
    events_by_category: dict[EventCategory, CategoryBucket] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day_number": self.day_number,
            "belongs_to_current_month": self.belongs_to_current_month,
            "date": self.date,
            "is_today": self.is_today,
            "events_by_category": {
                category.value: {
                    "count": bucket.count,
                    "events": [event.to_dict() for event in bucket.events],
                }
                for category, bucket in self.events_by_category.items()
            },
        }


@dataclass
class CalendarMonth:
    year: int
    month: int
    title: str
    cells: list[CalendarGridCell]

    @property
    def weeks(self) -> list[list[CalendarGridCell]]:
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "title": self.title,
            "weekdays": list(THAI_WEEKDAYS),
            "cells": [cell.to_dict() for cell in self.cells],
        }


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``(year, month)`` by ``delta`` months across year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def clamp_month(year: int, month: int) -> tuple[int, int]:
    """Keep ``(year, month)`` inside the range ``datetime.date`` supports."""
    index = year * 12 + (month - 1)
    index = max(date.min.year * 12, min(index, date.max.year * 12 + 11))
    return index // 12, index % 12 + 1


def _day_key(year: int, month: int, day: int) -> str:
    """Canonical key, or ``""`` for an adjacent day past ``date.min``/``date.max``."""
    if not date.min.year <= year <= date.max.year:
        return ""
    return date(year, month, day).isoformat()


def month_title(year: int, month: int) -> str:
    """Thai month name followed by the Buddhist-era year."""
    return f"{THAI_MONTHS[month - 1]} {year + ERA_YEAR_OFFSET}"


def group_by_date(events: Iterable[CalendarEvent]) -> dict[str, list[CalendarEvent]]:
    by_date: dict[str, list[CalendarEvent]] = defaultdict(list)
    for event in events:
        by_date[event.date].append(event)
    return by_date


def _group_by_category(events: list[CalendarEvent]) -> dict[EventCategory, CategoryBucket]:
    buckets: dict[EventCategory, CategoryBucket] = {}
    for event in events:
        buckets.setdefault(event.category, CategoryBucket()).events.append(event)
    return buckets


class CalendarGridBuilder:
    """Lay out one month as a Sunday-first grid of 7-day rows."""

    def build(
        self,
        year: int,
        month: int,
        events: Iterable[CalendarEvent],
        today: Optional[date] = None,
    ) -> CalendarMonth:
        if not 1 <= month <= 12:
            raise ValueError(f"month must be in 1..12, got {month}")
        if not date.min.year <= year <= date.max.year:
            raise ValueError(f"year must be in {date.min.year}..{date.max.year}, got {year}")
        today_key = (today or date.today()).isoformat()
        by_date = group_by_date(events)

        # calendar.monthrange counts Monday as 0
        first_weekday = (calendar.monthrange(year, month)[0] + 1) % 7
        days_in_month = calendar.monthrange(year, month)[1]
        prev_year, prev_month = shift_month(year, month, -1)
        next_year, next_month = shift_month(year, month, 1)
        days_in_prev_month = calendar.monthrange(prev_year, prev_month)[1]

        cells: list[CalendarGridCell] = []
        for offset in range(first_weekday - 1, -1, -1):
            day = days_in_prev_month - offset
            cells.append(CalendarGridCell(
                day_number=day,
                belongs_to_current_month=False,
                date=_day_key(prev_year, prev_month, day),
            ))

        for day in range(1, days_in_month + 1):
            key = date(year, month, day).isoformat()
            cells.append(CalendarGridCell(
                day_number=day,
                belongs_to_current_month=True,
                date=key,
                is_today=key == today_key,
                events_by_category=_group_by_category(by_date.get(key, [])),
            ))

        used = first_weekday + days_in_month
        remaining = 0 if used % 7 == 0 else 7 - used % 7
        for day in range(1, remaining + 1):
            cells.append(CalendarGridCell(
                day_number=day,
                belongs_to_current_month=False,
                date=_day_key(next_year, next_month, day),
            ))

        return CalendarMonth(year=year, month=month, title=month_title(year, month), cells=cells)
