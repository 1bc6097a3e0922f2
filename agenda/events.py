"""Calendar events built from announcements and vehicle logs."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from sheets.schemas import Announcement, VehicleLog

from .dates import format_time_for_display, normalize_date

logger = logging.getLogger(__name__)


class EventCategory(str, Enum):
    ANNOUNCEMENT = "Announcement"
    VEHICLE_USAGE = "VehicleUsage"


@dataclass(frozen=True)
class CalendarEvent:
    """One dated item shown on the calendar.

    ``source_id`` points back at the announcement or vehicle log the event
    came from; ``details`` carries whatever that record type has to show.
    """

    category: EventCategory
    date: str
    label: str
    source_id: str
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "date": self.date,
            "label": self.label,
            "source_id": self.source_id,
            "details": dict(self.details),
        }


def announcement_event(item: Announcement) -> CalendarEvent | None:
    day = normalize_date(item.date)
    if not day:
        return None
    return CalendarEvent(
        category=EventCategory.ANNOUNCEMENT,
        date=day,
        label=item.title,
        source_id=item.id,
        details={
            "detail": item.detail,
            "time": format_time_for_display(item.time),
            "time_suffix": item.time_suffix,
            "location": item.location,
            "posted_by": item.posted_by,
            "file_url": item.file_url,
        },
    )


def vehicle_event(item: VehicleLog) -> CalendarEvent | None:
    day = normalize_date(item.date)
    if not day:
        return None
    return CalendarEvent(
        category=EventCategory.VEHICLE_USAGE,
        date=day,
        label=f"{item.car_license} - {item.destination}",
        source_id=item.id,
        details={
            "car_license": item.car_license,
            "destination": item.destination,
            "driver": item.driver,
            "requestor": item.requestor,
            "status": item.status,
            "departure_time": format_time_for_display(item.departure_time),
            "return_time": format_time_for_display(item.return_time),
        },
    )


def build_calendar_events(
    announcements: Iterable[Announcement],
    vehicle_logs: Iterable[VehicleLog],
) -> list[CalendarEvent]:
    """Return a fresh event list; records without a date are left out."""
    events: list[CalendarEvent] = []
    skipped = 0
    for item in announcements:
        event = announcement_event(item)
        if event is None:
            skipped += 1
        else:
            events.append(event)
    for item in vehicle_logs:
        event = vehicle_event(item)
        if event is None:
            skipped += 1
        else:
            events.append(event)
    if skipped:
        logger.info("Skipped %d record(s) without a date", skipped)
    return events
