from datetime import date
from unittest.mock import Mock, patch
import base64
import os
import sys

import pytest

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sheets.forms import (
    AnnouncementForm,
    ValidationError,
    VehicleLogForm,
    encode_upload,
    encode_upload_file,
    submit_announcement,
)


def test_announcement_requires_title():
    with pytest.raises(ValidationError):
        AnnouncementForm(title="   ").to_payload()


def test_announcement_payload():
    payload = AnnouncementForm(title=" Meeting ", detail=" Room 2 ", id="A1").to_payload()
    assert payload == {"title": "Meeting", "detail": "Room 2", "fileURL": "", "id": "A1"}
    assert "id" not in AnnouncementForm(title="New").to_payload()


def test_vehicle_log_requires_fields():
    with pytest.raises(ValidationError):
        VehicleLogForm(car_license="กข 1234", destination="Hospital", driver=" ").to_payload()


def test_vehicle_log_defaults():
    payload = VehicleLogForm(car_license="กข 1234", destination="Hospital", driver="Somchai").to_payload()
    assert payload["date"] == date.today().isoformat()
    assert payload["status"] == "Active"
    assert payload["carLicense"] == "กข 1234"


def test_encode_upload():
    encoded = encode_upload(b"hello", "notes.txt")
    assert encoded == {
        "fileName": "notes.txt",
        "mimeType": "text/plain",
        "base64Data": base64.b64encode(b"hello").decode("ascii"),
    }
    assert encode_upload(b"x", "blob")["mimeType"] == "application/octet-stream"


def test_encode_upload_rejects_large_files(tmp_path):
    with patch("sheets.forms.MAX_UPLOAD_SIZE_BYTES", 4):
        with pytest.raises(ValidationError):
            encode_upload(b"hello", "notes.txt")
        path = tmp_path / "big.bin"
        path.write_bytes(b"12345")
        with pytest.raises(ValidationError):
            encode_upload_file(path)


def test_encode_upload_file(tmp_path):
    path = tmp_path / "memo.pdf"
    path.write_bytes(b"%PDF")
    encoded = encode_upload_file(path)
    assert encoded["fileName"] == "memo.pdf"
    assert encoded["mimeType"] == "application/pdf"


def test_submit_announcement_uses_uploaded_url():
    client = Mock()
    client.upload_file.return_value = {"success": True, "fileURL": "https://files/1"}
    client.save_announcement.return_value = {"success": True, "message": "saved"}

    result = submit_announcement(client, AnnouncementForm(title="Memo"), {"fileName": "memo.pdf"})

    assert result["success"]
    client.save_announcement.assert_called_once_with(
        {"title": "Memo", "detail": "", "fileURL": "https://files/1"}
    )


def test_failed_upload_stops_save():
    client = Mock()
    client.upload_file.return_value = {"success": False, "error": "Drive quota"}

    result = submit_announcement(client, AnnouncementForm(title="Memo"), {"fileName": "memo.pdf"})

    assert result == {"success": False, "error": "Drive quota"}
    client.save_announcement.assert_not_called()
