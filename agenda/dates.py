"""Date and time-of-day normalization for spreadsheet values.

The spreadsheet API hands back dates in several shapes: plain ``YYYY-MM-DD``
strings, ISO-8601 instants in UTC that actually mean Bangkok civil time, and
time-only cells serialized as a full date-time on the ``1899-12-30`` epoch.
The helpers here reduce all of them to ``YYYY-MM-DD`` and ``HH:MM`` text and
never raise on bad input.
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as dtparser

from sheets.config import CIVIL_UTC_OFFSET_HOURS, LOCAL_TZ

logger = logging.getLogger(__name__)

_CANONICAL_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_CIVIL_OFFSET = timedelta(hours=CIVIL_UTC_OFFSET_HOURS)
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def _as_text(raw: Any) -> str:
    if isinstance(raw, (datetime, date)):
        return raw.isoformat()
    return str(raw)


def _parse(text: str, default: Optional[datetime] = None) -> Optional[datetime]:
    """Parse ``text`` as a date-time, returning ``None`` when impossible."""
    try:
        return dtparser.parse(text, default=default)
    except (ValueError, OverflowError):
        return None


def _parse_full_date(text: str) -> Optional[datetime]:
    """Like ``_parse`` but ``None`` unless ``text`` names a year, month and day.

    dateutil fills missing fields from ``default``, so two different defaults
    only agree when nothing was filled in.
    """
    first = _parse(text, default=_DEFAULT_A)
    if first is None or first != _parse(text, default=_DEFAULT_B):
        return None
    return first


def _local_zone(tz: tzinfo | str | None) -> Optional[tzinfo]:
    """Resolve the zone used for wall-clock readings.

    ``None`` with no ``OMS_LOCAL_TZ`` configured means the machine's zone,
    as does an unknown zone name.
    """
    name = tz if tz is not None else (LOCAL_TZ or None)
    if name is None or isinstance(name, tzinfo):
        return name
    if name.upper() in {"UTC", "Z"}:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        logger.warning("Unknown timezone %r, using the local zone: %s", name, exc)
        return None


def is_canonical_date(value: Any) -> bool:
    return isinstance(value, str) and _CANONICAL_DATE_RE.fullmatch(value) is not None


def normalize_date(raw: Any) -> str:
    """Return ``raw`` as a ``YYYY-MM-DD`` civil date.

    * empty or ``None`` gives ``""`` (no date);
    * a value already in ``YYYY-MM-DD`` form is returned untouched;
    * anything else is parsed, shifted by +7 hours and read as a UTC date
      (naive values are taken as UTC);
    * unparseable input, or text missing the year, month or day (a bare
      time, ``"March 2024"``), is returned unchanged.
    """
    if raw is None or raw == "":
        return ""
    if isinstance(raw, date) and not isinstance(raw, datetime):
        return raw.isoformat()

    text = _as_text(raw)
    if is_canonical_date(text):
        return text

    parsed = raw if isinstance(raw, datetime) else _parse_full_date(text)
    if parsed is None:
        return text
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        shifted = parsed.astimezone(timezone.utc) + _CIVIL_OFFSET
    except OverflowError:
        return text
    return shifted.date().isoformat()


def _wall_clock(text: str, tz: tzinfo | str | None) -> Optional[str]:
    # No civil offset here: the reading is in the local zone, unlike normalize_date.
    parsed = _parse(text)
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(_local_zone(tz))
    return parsed.strftime("%H:%M")


def normalize_time_for_editing(raw: Any, tz: tzinfo | str | None = None) -> str:
    """Return ``HH:MM`` for a time input field, or ``""`` when there is none."""
    if raw is None or raw == "":
        return ""
    text = _as_text(raw)
    if "T" in text:
        return _wall_clock(text, tz) or ""
    if ":" in text:
        return text[:5]
    return ""


def format_time_for_display(raw: Any, tz: tzinfo | str | None = None) -> str:
    """Return ``HH:MM`` for read-only views; ``-`` stands in for no value."""
    if raw is None or raw == "":
        return "-"
    text = _as_text(raw)
    if "T" in text:
        return _wall_clock(text, tz) or "-"
    if ":" in text:
        return text[:5]
    return text


def format_date_for_display(raw: Any) -> str:
    return normalize_date(raw) or "-"
