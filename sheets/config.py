"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# REMOTE ENDPOINT
# =============================================================================

API_URL = os.getenv("OMS_API_URL", "http://localhost:8080/exec")
REQUEST_TIMEOUT = float(os.getenv("OMS_TIMEOUT", "30"))
CONNECTION_ERROR_MESSAGE = "ไม่สามารถเชื่อมต่อกับเซิร์ฟเวอร์ได้"

# =============================================================================
# SESSION
# =============================================================================

SESSION_FILE = Path(
    os.getenv("OMS_SESSION_FILE", str(Path.home() / ".office_desk" / "session.json"))
)
ADMIN_ROLE = "Admin"

# =============================================================================
# DATES AND CALENDAR
# =============================================================================

# Upstream timestamps are UTC instants that stand for Bangkok civil time
CIVIL_UTC_OFFSET_HOURS = 7
ERA_YEAR_OFFSET = 543
LOCAL_TZ = os.getenv("OMS_LOCAL_TZ", "")

# =============================================================================
# UPLOADS
# =============================================================================

MAX_UPLOAD_SIZE_MB = 10
MAX_UPLOAD_SIZE_BYTES = MAX_UPLOAD_SIZE_MB * 1024 * 1024

# =============================================================================
# LOGGING
# =============================================================================

DEBUG = bool(os.getenv("OMS_DEBUG"))
