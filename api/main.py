"""FastAPI application for the Office Desk front end."""
import base64
import binascii
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel

from agenda.dates import format_date_for_display
from agenda.filters import Period, filter_by_period
from agenda.view import CalendarView
from sheets.api_client import OfficeApiClient
from sheets.forms import (
    AnnouncementForm,
    ValidationError,
    VehicleLogForm,
    encode_upload,
    submit_announcement,
)
from sheets.session import SessionUser

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

app = FastAPI(
    title="Office Desk API",
    description="Calendar, announcements and vehicle log views over the office spreadsheet API",
    version=API_VERSION,
)

security = HTTPBasic()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    username: str
    name: str
    role: str
    is_admin: bool


class Attachment(BaseModel):
    """File to upload before saving an announcement."""
    file_name: str
    content_base64: str
    mime_type: Optional[str] = None


class AnnouncementRequest(BaseModel):
    title: str
    detail: str = ""
    file_url: str = ""
    id: str = ""
    attachment: Optional[Attachment] = None


class VehicleLogRequest(BaseModel):
    car_license: str
    destination: str
    driver: str
    date: Optional[str] = None
    mileage_start: str = ""
    mileage_end: str = ""
    status: str = "Active"
    id: str = ""


class WriteResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Optional[Dict] = None


def _make_client(user: Optional[SessionUser] = None) -> OfficeApiClient:
    """Return an API client, bound to ``user`` for writes."""
    return OfficeApiClient(user=user)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def require_admin(credentials: HTTPBasicCredentials = Depends(security)) -> SessionUser:
    """Log the caller in against the remote API and insist on the Admin role."""
    client = _make_client()
    result = client.login(credentials.username, credentials.password)
    if not result.get("success"):
        logger.warning("Rejected credentials for %s", credentials.username)
        raise HTTPException(status_code=401, detail=result.get("error") or "Login failed")
    user = SessionUser.from_response(result, password=credentials.password)
    if not user.is_admin:
        logger.warning("Write refused for %s (role %r)", user.username, user.role)
        raise HTTPException(status_code=403, detail="Admin role required")
    return user


def _write_result(result: Dict) -> WriteResponse:
    if not result.get("success"):
        raise HTTPException(status_code=400, detail=result.get("error") or "Request rejected")
    extra = {k: v for k, v in result.items() if k not in ("success", "message")}
    return WriteResponse(success=True, message=result.get("message"), data=extra or None)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", timestamp=_now(), version=API_VERSION)


@app.post("/login", response_model=LoginResponse)
def login(request: LoginRequest):
    """Check credentials against the remote API and return the account."""
    username, password = request.username.strip(), request.password.strip()
    if not username or not password:
        raise HTTPException(status_code=422, detail="กรุณากรอก Username และ Password")
    result = _make_client().login(username, password)
    if not result.get("success"):
        raise HTTPException(status_code=401, detail=result.get("error") or "เข้าสู่ระบบไม่สำเร็จ")
    user = SessionUser.from_response(result, password=password)
    return LoginResponse(username=user.username, name=user.name, role=user.role, is_admin=user.is_admin)


@app.get("/calendar")
async def calendar_month(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    nav: Optional[str] = Query(None, pattern="^(prev|next|today)$"),
):
    """
    Build the month grid with announcements and vehicle trips.

    Both sources are pulled concurrently; a source that fails is reported in
    ``errors`` and the grid is built from the other one.
    """
    if (year is None) != (month is None):
        raise HTTPException(status_code=422, detail="year and month must be given together")

    view = CalendarView(client=_make_client())
    await view.reload()
    if year is not None:
        view.go_to(year, month)

    if nav == "prev":
        grid = view.previous()
    elif nav == "next":
        grid = view.next()
    elif nav == "today":
        grid = view.reset_to_today()
    else:
        grid = view.render()

    payload = grid.to_dict()
    payload["errors"] = view.errors
    return payload


def _listing(source, period: Period) -> List[Dict]:
    if source.error:
        raise HTTPException(status_code=502, detail=source.error)
    rows = []
    for record in filter_by_period(source.records, period):
        row = asdict(record)
        row["display_date"] = format_date_for_display(record.date)
        rows.append(row)
    return rows


@app.get("/announcements")
def list_announcements(period: Period = Period.ALL):
    return _listing(_make_client().get_announcements(), period)


@app.get("/vehicle-logs")
def list_vehicle_logs(period: Period = Period.ALL):
    return _listing(_make_client().get_vehicle_logs(), period)


@app.get("/dashboard")
def dashboard():
    counts = _make_client().get_dashboard()
    if counts is None:
        raise HTTPException(status_code=502, detail="Dashboard unavailable")
    return asdict(counts)


@app.post("/announcements", response_model=WriteResponse)
def save_announcement(request: AnnouncementRequest, user: SessionUser = Depends(require_admin)):
    form = AnnouncementForm(title=request.title, detail=request.detail, file_url=request.file_url, id=request.id)
    try:
        upload = None
        if request.attachment is not None:
            content = base64.b64decode(request.attachment.content_base64, validate=True)
            upload = encode_upload(content, request.attachment.file_name, request.attachment.mime_type)
        result = submit_announcement(_make_client(user), form, upload)
    except binascii.Error:
        raise HTTPException(status_code=422, detail="Attachment is not valid base64")
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _write_result(result)


@app.delete("/announcements/{announcement_id}", response_model=WriteResponse)
def delete_announcement(announcement_id: str, user: SessionUser = Depends(require_admin)):
    return _write_result(_make_client(user).delete_announcement(announcement_id))


@app.post("/vehicle-logs", response_model=WriteResponse)
def save_vehicle_log(request: VehicleLogRequest, user: SessionUser = Depends(require_admin)):
    fields = request.model_dump(exclude_none=True)
    try:
        payload = VehicleLogForm(**fields).to_payload()
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _write_result(_make_client(user).save_vehicle_log(payload))


@app.delete("/vehicle-logs/{log_id}", response_model=WriteResponse)
def delete_vehicle_log(log_id: str, user: SessionUser = Depends(require_admin)):
    return _write_result(_make_client(user).delete_vehicle_log(log_id))


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Office Desk API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
