"""Input checks and payload building for the write operations."""
from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from .config import MAX_UPLOAD_SIZE_BYTES, MAX_UPLOAD_SIZE_MB


class ValidationError(ValueError):
    """Raised when user input is rejected before reaching the remote API."""


@dataclass
class AnnouncementForm:
    title: str
    detail: str = ""
    file_url: str = ""
    id: str = ""

    def to_payload(self) -> dict:
        title = self.title.strip()
        if not title:
            raise ValidationError("กรุณากรอกหัวข้อข่าว")
        payload = {"title": title, "detail": self.detail.strip(), "fileURL": self.file_url}
        if self.id:
            payload["id"] = self.id
        return payload


@dataclass
class VehicleLogForm:
    car_license: str
    destination: str
    driver: str
    date: str = field(default_factory=lambda: date.today().isoformat())
    mileage_start: str = ""
    mileage_end: str = ""
    status: str = "Active"
    id: str = ""

    def to_payload(self) -> dict:
        required = (self.date, self.car_license.strip(), self.destination.strip(), self.driver.strip())
        if not all(required):
            raise ValidationError("กรุณากรอกข้อมูลที่จำเป็น")
        payload = {
            "date": self.date,
            "carLicense": self.car_license.strip(),
            "destination": self.destination.strip(),
            "mileageStart": self.mileage_start,
            "mileageEnd": self.mileage_end,
            "driver": self.driver.strip(),
            "status": self.status or "Active",
        }
        if self.id:
            payload["id"] = self.id
        return payload


def encode_upload(content: bytes, file_name: str, mime_type: Optional[str] = None) -> dict:
    """Return the ``uploadFile`` fields for ``content``.

    Files larger than the upload limit are rejected.
    """
    if len(content) > MAX_UPLOAD_SIZE_BYTES:
        raise ValidationError(f"ไฟล์ต้องมีขนาดไม่เกิน {MAX_UPLOAD_SIZE_MB} MB")
    if not mime_type:
        mime_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
    return {
        "fileName": file_name,
        "mimeType": mime_type,
        "base64Data": base64.b64encode(content).decode("ascii"),
    }


def encode_upload_file(path: str | Path) -> dict:
    """Read ``path`` from disk and encode it for upload."""
    path = Path(path)
    if path.stat().st_size > MAX_UPLOAD_SIZE_BYTES:
        raise ValidationError(f"ไฟล์ต้องมีขนาดไม่เกิน {MAX_UPLOAD_SIZE_MB} MB")
    return encode_upload(path.read_bytes(), path.name)


def submit_announcement(client, form: AnnouncementForm, upload: Optional[dict] = None) -> dict:
    """Upload the attachment (if any) and then save the announcement.

    ``upload`` is the output of ``encode_upload``. A failed upload stops the
    save and its response is returned as-is.
    """
    payload = form.to_payload()
    if upload:
        uploaded = client.upload_file(upload)
        if not uploaded.get("success"):
            return uploaded
        payload["fileURL"] = uploaded.get("fileURL", "")
    return client.save_announcement(payload)
