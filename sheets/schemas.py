"""Typed records for the rows returned by the office spreadsheet API."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


def _lookup(record: dict[str, Any], key: str) -> Any:
    """Return ``record[key]`` matching the key case-insensitively."""
    if key in record:
        return record[key]
    lowered = key.lower()
    for name, value in record.items():
        if str(name).lower() == lowered:
            return value
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _split(record: dict[str, Any], known: tuple[str, ...]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate the known columns from everything else in ``record``."""
    lowered = {k.lower() for k in known}
    values = {k: _lookup(record, k) for k in known}
    extra = {k: v for k, v in record.items() if str(k).lower() not in lowered}
    return values, extra


@dataclass
class Announcement:
    """A news item posted on the office board."""

    id: str
    title: str
    detail: str = ""
    date: str = ""
    time: str = ""
    time_suffix: str = ""
    location: str = ""
    posted_by: str = ""
    file_url: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    COLUMNS = ("ID", "Title", "Detail", "Date", "Time", "TimeSuffix", "Location", "PostedBy", "FileURL")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Announcement":
        values, extra = _split(record, cls.COLUMNS)
        return cls(
            id=_text(values["ID"]),
            title=_text(values["Title"]),
            detail=_text(values["Detail"]),
            date=_text(values["Date"]),
            time=_text(values["Time"]),
            time_suffix=_text(values["TimeSuffix"]),
            location=_text(values["Location"]),
            posted_by=_text(values["PostedBy"]),
            file_url=_text(values["FileURL"]),
            extra=extra,
        )


@dataclass
class VehicleLog:
    """One trip in the vehicle usage log."""

    id: str
    car_license: str
    destination: str
    date: str = ""
    mileage_start: str = ""
    mileage_end: str = ""
    driver: str = ""
    status: str = ""
    departure_time: str = ""
    return_time: str = ""
    requestor: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    COLUMNS = (
        "ID", "Date", "CarLicense", "Destination", "MileageStart", "MileageEnd",
        "Driver", "Status", "DepartureTime", "ReturnTime", "Requestor",
    )

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "VehicleLog":
        values, extra = _split(record, cls.COLUMNS)
        return cls(
            id=_text(values["ID"]),
            car_license=_text(values["CarLicense"]),
            destination=_text(values["Destination"]),
            date=_text(values["Date"]),
            mileage_start=_text(values["MileageStart"]),
            mileage_end=_text(values["MileageEnd"]),
            driver=_text(values["Driver"]),
            status=_text(values["Status"]),
            departure_time=_text(values["DepartureTime"]),
            return_time=_text(values["ReturnTime"]),
            requestor=_text(values["Requestor"]),
            extra=extra,
        )


@dataclass
class Dashboard:
    """Counters shown on the landing page."""

    total_announcements: int = 0
    total_vehicle_logs: int = 0
    active_vehicles: int = 0

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "Dashboard":
        return cls(
            total_announcements=int(response.get("totalAnnouncements") or 0),
            total_vehicle_logs=int(response.get("totalVehicleLogs") or 0),
            active_vehicles=int(response.get("activeVehicles") or 0),
        )


@dataclass
class SourceResult:
    """Outcome of pulling one record list from the remote API."""

    name: str
    records: list = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
