"""List announcements or vehicle logs, optionally limited to a period."""
from __future__ import annotations

import argparse
import sys

from agenda.dates import format_date_for_display, format_time_for_display
from agenda.filters import Period, filter_by_period
from agenda.formatting import format_number, truncate
from sheets.api_client import OfficeApiClient


def announcement_line(index: int, item) -> str:
    return (
        f"{index:>3}. {format_date_for_display(item.date)}  {item.title}"
        f"  {truncate(item.detail, 60)}  ({item.posted_by or '-'})"
    )


def vehicle_line(index: int, item) -> str:
    return (
        f"{index:>3}. {format_date_for_display(item.date)}  {item.car_license}"
        f" -> {item.destination}  {format_number(item.mileage_start)}"
        f"..{format_number(item.mileage_end)}  {item.driver or '-'}"
        f"  {format_time_for_display(item.departure_time)}  [{item.status or '-'}]"
    )


def run(kind: str, period: Period = Period.ALL) -> int:
    """Print the listing; return a process exit code."""
    client = OfficeApiClient()
    if kind == "announcements":
        source, render = client.get_announcements(), announcement_line
    else:
        source, render = client.get_vehicle_logs(), vehicle_line

    if source.error:
        print("❌ Failed to load:", source.error)
        return 1

    records = filter_by_period(source.records, period)
    if not records:
        print("No records for", period.value)
        return 0
    for index, item in enumerate(records, start=1):
        print(render(index, item))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="List office records")
    parser.add_argument("kind", choices=["announcements", "vehicles"])
    parser.add_argument("--period", type=Period, choices=list(Period), default=Period.ALL)
    args = parser.parse_args()
    sys.exit(run(args.kind, args.period))
