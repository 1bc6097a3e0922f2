import calendar
from datetime import date
import os
import sys

import pytest

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from agenda.events import CalendarEvent, EventCategory
from agenda.grid import CalendarGridBuilder, clamp_month, month_title, shift_month

builder = CalendarGridBuilder()


def make_event(day, category=EventCategory.ANNOUNCEMENT, label="Meeting", source_id="1"):
    return CalendarEvent(category=category, date=day, label=label, source_id=source_id)


def current_cells(grid):
    return [cell for cell in grid.cells if cell.belongs_to_current_month]


def test_leap_february_layout():
    grid = builder.build(2024, 2, [], today=date(2000, 1, 1))
    # 1 Feb 2024 is a Thursday
    assert [cell.day_number for cell in grid.cells[:4]] == [28, 29, 30, 31]
    assert all(not cell.belongs_to_current_month for cell in grid.cells[:4])
    assert len(grid.cells) == 35
    assert [cell.day_number for cell in grid.cells[-2:]] == [1, 2]
    assert grid.cells[-1].date == "2024-03-02"
    days = [cell.day_number for cell in current_cells(grid)]
    assert days == list(range(1, 30))
    assert current_cells(grid)[-1].date == "2024-02-29"


def test_every_month_is_whole_weeks_with_each_day_once():
    for year in (2023, 2024, 2025):
        for month in range(1, 13):
            grid = builder.build(year, month, [], today=date(2000, 1, 1))
            days_in_month = calendar.monthrange(year, month)[1]
            assert len(grid.cells) % 7 == 0
            assert len(grid.cells) >= days_in_month
            assert [cell.day_number for cell in current_cells(grid)] == list(range(1, days_in_month + 1))
            assert all(len(week) == 7 for week in grid.weeks)


def test_month_filling_exact_weeks_has_no_padding():
    # 1 Feb 2015 is a Sunday and the month has 28 days
    grid = builder.build(2015, 2, [], today=date(2000, 1, 1))
    assert len(grid.cells) == 28
    assert all(cell.belongs_to_current_month for cell in grid.cells)


def test_january_leading_days_come_from_previous_december():
    grid = builder.build(2025, 1, [], today=date(2000, 1, 1))
    # 1 Jan 2025 is a Wednesday
    assert [cell.date for cell in grid.cells[:3]] == ["2024-12-29", "2024-12-30", "2024-12-31"]


def test_today_is_marked_once():
    grid = builder.build(2024, 2, [], today=date(2024, 2, 14))
    marked = [cell for cell in grid.cells if cell.is_today]
    assert len(marked) == 1
    assert marked[0].day_number == 14
    assert marked[0].belongs_to_current_month


def test_today_in_trailing_days_is_not_marked():
    grid = builder.build(2024, 2, [], today=date(2024, 3, 1))
    assert not any(cell.is_today for cell in grid.cells)


def test_events_grouped_by_category_on_same_day():
    events = [
        make_event("2024-02-10", EventCategory.ANNOUNCEMENT, "Staff meeting", "A1"),
        make_event("2024-02-10", EventCategory.VEHICLE_USAGE, "กข 1234 - Hospital", "V1"),
        make_event("2024-02-10", EventCategory.ANNOUNCEMENT, "Budget review", "A2"),
    ]
    grid = builder.build(2024, 2, events, today=date(2000, 1, 1))
    cell = next(c for c in grid.cells if c.date == "2024-02-10" and c.belongs_to_current_month)

    assert list(cell.events_by_category) == [EventCategory.ANNOUNCEMENT, EventCategory.VEHICLE_USAGE]
    announcements = cell.events_by_category[EventCategory.ANNOUNCEMENT]
    assert announcements.count == 2
    assert [e.source_id for e in announcements.events] == ["A1", "A2"]
    assert cell.events_by_category[EventCategory.VEHICLE_USAGE].count == 1


def test_days_without_events_have_empty_buckets():
    grid = builder.build(2024, 2, [make_event("2024-02-10")], today=date(2000, 1, 1))
    empty = next(c for c in grid.cells if c.date == "2024-02-11")
    assert empty.events_by_category == {}


def test_events_outside_month_or_unparsed_are_not_placed():
    events = [make_event("2024-03-01"), make_event("garbage"), make_event("2024-2-10")]
    grid = builder.build(2024, 2, events, today=date(2000, 1, 1))
    assert all(cell.events_by_category == {} for cell in grid.cells)


def test_title_uses_buddhist_era_year():
    assert month_title(2024, 2) == "กุมภาพันธ์ 2567"
    assert builder.build(2025, 1, [], today=date(2000, 1, 1)).title == "มกราคม 2568"


def test_shift_month_across_year_boundaries():
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2024, 1, -1) == (2023, 12)
    assert shift_month(2024, 5, 0) == (2024, 5)
    assert shift_month(2024, 13, 0) == (2025, 1)


def test_invalid_month_is_rejected():
    with pytest.raises(ValueError):
        builder.build(2024, 13, [])


def test_last_supported_month_builds():
    grid = builder.build(9999, 12, [], today=date(2024, 1, 1))
    assert len(grid.cells) % 7 == 0
    assert len(current_cells(grid)) == 31
    assert current_cells(grid)[-1].date == "9999-12-31"
    trailing = grid.cells[grid.cells.index(current_cells(grid)[-1]) + 1:]
    assert trailing
    assert all(c.date == "" for c in trailing)


def test_first_supported_month_builds():
    grid = builder.build(1, 1, [], today=date(2024, 1, 1))
    assert len(grid.cells) % 7 == 0
    assert current_cells(grid)[0].date == "0001-01-01"
    leading = grid.cells[: grid.cells.index(current_cells(grid)[0])]
    assert leading
    assert all(c.date == "" for c in leading)


@pytest.mark.parametrize("year", [0, 10000])
def test_year_outside_date_range_is_rejected(year):
    with pytest.raises(ValueError):
        builder.build(year, 1, [])


def test_clamp_month_stops_at_date_range():
    assert clamp_month(10000, 1) == (9999, 12)
    assert clamp_month(0, 12) == (1, 1)
    assert clamp_month(2024, 5) == (2024, 5)


def test_to_dict_is_plain_data():
    grid = builder.build(2024, 2, [make_event("2024-02-10")], today=date(2024, 2, 10))
    data = grid.to_dict()
    assert data["title"] == "กุมภาพันธ์ 2567"
    assert len(data["weekdays"]) == 7
    cell = next(c for c in data["cells"] if c["date"] == "2024-02-10")
    assert cell["is_today"] is True
    assert cell["events_by_category"]["Announcement"]["count"] == 1
    assert cell["events_by_category"]["Announcement"]["events"][0]["label"] == "Meeting"
