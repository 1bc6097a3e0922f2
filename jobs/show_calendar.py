"""Print one month of the office calendar in the terminal."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from agenda.events import EventCategory
from agenda.grid import THAI_WEEKDAYS, CalendarMonth
from agenda.view import CalendarView
from sheets.api_client import OfficeApiClient

logger = logging.getLogger(__name__)
if os.getenv("OMS_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")

MARKERS = {EventCategory.ANNOUNCEMENT: "A", EventCategory.VEHICLE_USAGE: "V"}


def format_cell(cell) -> str:
    if not cell.belongs_to_current_month:
        return f"({cell.day_number:>2})".ljust(9)
    marks = "".join(
        f"{MARKERS[category]}{bucket.count}" for category, bucket in cell.events_by_category.items()
    )
    day = f"*{cell.day_number:>2}" if cell.is_today else f" {cell.day_number:>2}"
    return f"{day} {marks}".ljust(9)


def format_month(grid: CalendarMonth) -> str:
    lines = [grid.title, "".join(name.ljust(9) for name in THAI_WEEKDAYS)]
    for week in grid.weeks:
        lines.append("".join(format_cell(cell) for cell in week).rstrip())
    return "\n".join(lines)


def format_agenda(grid: CalendarMonth) -> str:
    lines = []
    for cell in grid.cells:
        if not cell.belongs_to_current_month:
            continue
        for bucket in cell.events_by_category.values():
            for event in bucket.events:
                lines.append(f"{event.date}  [{MARKERS[event.category]}] {event.label}")
    return "\n".join(lines)


async def run(year: int | None = None, month: int | None = None, step: int = 0) -> str:
    """Load both sources and return the month as text."""
    view = CalendarView(client=OfficeApiClient())
    await view.reload()
    if year is not None and month is not None:
        view.go_to(year, month)
    if step > 0:
        grid = view.next()
    elif step < 0:
        grid = view.previous()
    else:
        grid = view.render()

    output = [format_month(grid)]
    agenda = format_agenda(grid)
    if agenda:
        output.extend(["", agenda])
    for source, error in view.errors.items():
        output.append(f"❌ {source}: {error}")
    return "\n".join(output)


def main() -> None:
    parser = argparse.ArgumentParser(description="Show the office calendar")
    parser.add_argument("--year", type=int)
    parser.add_argument("--month", type=int)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--next", dest="step", action="store_const", const=1, default=0)
    group.add_argument("--prev", dest="step", action="store_const", const=-1)
    args = parser.parse_args()
    if (args.year is None) != (args.month is None):
        parser.error("--year and --month must be given together")
    print(asyncio.run(run(args.year, args.month, args.step)))


if __name__ == "__main__":
    main()
