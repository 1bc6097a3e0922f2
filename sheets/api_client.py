"""Client for the office spreadsheet web app.

The remote side is a single URL. Reads are ``GET`` requests selected by an
``action`` query parameter, writes are ``POST`` requests whose JSON body carries
the ``action`` and, when someone is logged in, their credentials.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from .config import API_URL, CONNECTION_ERROR_MESSAGE, DEBUG, REQUEST_TIMEOUT
from .schemas import Announcement, Dashboard, SourceResult, VehicleLog
from .session import SessionUser

logger = logging.getLogger(__name__)
if DEBUG:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

_SECRET_KEYS = {"password", "base64Data"}


def _make_headers() -> dict[str, str]:
    """Return headers for POST requests.

    The web app cannot answer a CORS preflight, so the JSON body goes out as
    plain text.
    """
    return {"Content-Type": "text/plain;charset=utf-8"}


def _masked(payload: dict[str, Any]) -> dict[str, Any]:
    return {k: ("***" if k in _SECRET_KEYS else v) for k, v in payload.items()}


def _log_request(method: str, url: str, payload: dict[str, Any] | None = None) -> None:
    """Log details about an outgoing HTTP request."""
    logger.info("%s %s", method.upper(), url)
    if payload is not None:
        logger.info("Payload: %s", _masked(payload))


def _failure(message: str) -> dict[str, Any]:
    return {"success": False, "error": message}


class OfficeApiClient:
    """Thin wrapper over the remote web app.

    Every call returns the decoded JSON response. Network and decoding errors
    never escape: they come back as ``{"success": False, "error": ...}``.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user: Optional[SessionUser] = None,
    ):
        self.api_url = api_url or API_URL
        self.timeout = timeout or REQUEST_TIMEOUT
        self.user = user

    def get(self, params: dict[str, Any]) -> dict[str, Any]:
        """Send a GET request with ``params`` as the query string."""
        _log_request("get", self.api_url, params)
        try:
            response = requests.get(self.api_url, params=params, timeout=self.timeout)
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("API GET error: %s", exc)
            return _failure(CONNECTION_ERROR_MESSAGE)

    def post(self, body: dict[str, Any]) -> dict[str, Any]:
        """Send ``body`` as JSON, with the session credentials attached."""
        payload = dict(body)
        if self.user is not None:
            payload["username"] = self.user.username
            payload["password"] = self.user.password
        _log_request("post", self.api_url, payload)
        try:
            response = requests.post(
                self.api_url,
                data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                headers=_make_headers(),
                timeout=self.timeout,
                allow_redirects=True,
            )
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("API POST error: %s", exc)
            return _failure(CONNECTION_ERROR_MESSAGE)

    # -- reads -------------------------------------------------------------

    def login(self, username: str, password: str) -> dict[str, Any]:
        return self.get({"action": "login", "username": username, "password": password})

    def _fetch_list(self, name: str, action: str, record_type) -> SourceResult:
        result = self.get({"action": action})
        if not result.get("success"):
            return SourceResult(name=name, error=result.get("error") or "request failed")
        rows = result.get("data") or []
        return SourceResult(
            name=name,
            records=[record_type.from_record(row) for row in rows if isinstance(row, dict)],
        )

    def get_announcements(self) -> SourceResult:
        return self._fetch_list("announcements", "getAnnouncements", Announcement)

    def get_vehicle_logs(self) -> SourceResult:
        return self._fetch_list("vehicle_logs", "getVehicleLogs", VehicleLog)

    def get_dashboard(self) -> Optional[Dashboard]:
        result = self.get({"action": "getDashboard"})
        if not result.get("success"):
            logger.warning("Dashboard unavailable: %s", result.get("error"))
            return None
        return Dashboard.from_response(result)

    # -- writes ------------------------------------------------------------

    def save_announcement(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Add an announcement, or update it when ``payload`` has an ``id``."""
        action = "updateAnnouncement" if payload.get("id") else "addAnnouncement"
        return self.post({"action": action, **payload})

    def delete_announcement(self, announcement_id: str) -> dict[str, Any]:
        return self.post({"action": "deleteAnnouncement", "id": announcement_id})

    def save_vehicle_log(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Add a vehicle log, or update it when ``payload`` has an ``id``."""
        action = "updateVehicleLog" if payload.get("id") else "addVehicleLog"
        return self.post({"action": action, **payload})

    def delete_vehicle_log(self, log_id: str) -> dict[str, Any]:
        return self.post({"action": "deleteVehicleLog", "id": log_id})

    def upload_file(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send an encoded file (see ``sheets.forms.encode_upload``)."""
        return self.post({"action": "uploadFile", **payload})
