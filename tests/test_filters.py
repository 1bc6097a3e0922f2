from datetime import date
import os
import sys

import pytest

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from agenda.filters import Period, filter_by_period
from agenda.formatting import format_number, truncate
from sheets.schemas import Announcement

REFERENCE = date(2024, 5, 15)


@pytest.fixture
def records():
    return [
        Announcement(id="same-day", title="a", date="2024-05-15"),
        Announcement(id="instant", title="b", date="2024-05-14T20:00:00.000Z"),
        Announcement(id="same-month", title="c", date="2024-05-01"),
        Announcement(id="same-quarter", title="d", date="2024-04-30"),
        Announcement(id="same-year", title="e", date="2024-11-02"),
        Announcement(id="last-year", title="f", date="2023-05-15"),
        Announcement(id="undated", title="g", date=""),
        Announcement(id="broken", title="h", date="soon"),
    ]


def ids(records):
    return [r.id for r in records]


def test_daily(records):
    assert ids(filter_by_period(records, Period.DAILY, REFERENCE)) == ["same-day", "instant"]


def test_monthly(records):
    assert ids(filter_by_period(records, "monthly", REFERENCE)) == ["same-day", "instant", "same-month"]


def test_quarterly(records):
    assert ids(filter_by_period(records, Period.QUARTERLY, REFERENCE)) == [
        "same-day", "instant", "same-month", "same-quarter",
    ]


def test_yearly(records):
    assert "last-year" not in ids(filter_by_period(records, Period.YEARLY, REFERENCE))
    assert len(filter_by_period(records, Period.YEARLY, REFERENCE)) == 5


def test_all_keeps_everything(records):
    assert len(filter_by_period(records, Period.ALL)) == len(records)


def test_unknown_period_is_rejected(records):
    with pytest.raises(ValueError):
        filter_by_period(records, "weekly", REFERENCE)


def test_truncate():
    assert truncate("abcdef", 3) == "abc..."
    assert truncate("abc", 3) == "abc"
    assert truncate(None, 3) == ""


@pytest.mark.parametrize(
    "value, expected",
    [("", "-"), (None, "-"), ("12345", "12,345"), (1500.5, "1,500.5"), ("n/a", "n/a")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected
