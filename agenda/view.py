"""Calendar view state: the displayed month and the loaded events."""
from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from .events import CalendarEvent, build_calendar_events
from .grid import CalendarGridBuilder, CalendarMonth, clamp_month, shift_month
from .loader import CalendarSources, load_calendar_sources

logger = logging.getLogger(__name__)


class CalendarView:
    """Owns the month cursor and the in-memory event list.

    Every navigation step rebuilds the whole grid from ``events``; nothing is
    updated in place. Navigation stops at the ends of the ``datetime.date``
    range.
    """

    def __init__(
        self,
        client=None,
        builder: Optional[CalendarGridBuilder] = None,
        today: Callable[[], date] = date.today,
    ):
        self.client = client
        self.builder = builder or CalendarGridBuilder()
        self._today = today
        current = today()
        self.year = current.year
        self.month = current.month
        self.events: list[CalendarEvent] = []
        self.errors: dict[str, str] = {}

    def set_events(self, events: list[CalendarEvent]) -> CalendarMonth:
        self.events = list(events)
        return self.render()

    def apply_sources(self, sources: CalendarSources) -> CalendarMonth:
        self.errors = sources.errors
        return self.set_events(
            build_calendar_events(sources.announcements.records, sources.vehicle_logs.records)
        )

    async def reload(self) -> CalendarMonth:
        """Pull both sources from the API and rebuild the grid."""
        if self.client is None:
            raise RuntimeError("CalendarView.reload needs an API client")
        sources = await load_calendar_sources(self.client)
        return self.apply_sources(sources)

    def go_to(self, year: int, month: int) -> CalendarMonth:
        self.year, self.month = clamp_month(*shift_month(year, month, 0))
        return self.render()

    def previous(self) -> CalendarMonth:
        self.year, self.month = clamp_month(*shift_month(self.year, self.month, -1))
        return self.render()

    def next(self) -> CalendarMonth:
        self.year, self.month = clamp_month(*shift_month(self.year, self.month, 1))
        return self.render()

    def reset_to_today(self) -> CalendarMonth:
        current = self._today()
        self.year, self.month = current.year, current.month
        return self.render()

    def render(self) -> CalendarMonth:
        logger.debug("Rendering %04d-%02d with %d event(s)", self.year, self.month, len(self.events))
        return self.builder.build(self.year, self.month, self.events, today=self._today())
