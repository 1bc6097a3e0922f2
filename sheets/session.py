"""Logged-in user and its on-disk session file."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from .config import ADMIN_ROLE, SESSION_FILE
from .forms import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SessionUser:
    """The account returned by a successful login.

    The password is kept because every write to the remote API has to carry
    the credentials again.
    """

    username: str
    password: str = ""
    name: str = ""
    role: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @property
    def initial(self) -> str:
        return (self.name or "U")[0]

    @classmethod
    def from_response(cls, response: dict[str, Any], password: str = "") -> "SessionUser":
        known = {"success", "username", "password", "name", "role"}
        return cls(
            username=str(response.get("username") or ""),
            password=password or str(response.get("password") or ""),
            name=str(response.get("name") or ""),
            role=str(response.get("role") or ""),
            extra={k: v for k, v in response.items() if k not in known},
        )


class SessionStore:
    """Persist the current user as JSON between runs."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else SESSION_FILE

    def load(self) -> Optional[SessionUser]:
        """Return the saved user, or ``None`` when nobody is logged in."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return None
        if not isinstance(data, dict) or not data.get("username"):
            return None
        return SessionUser(**{k: data[k] for k in ("username", "password", "name", "role", "extra") if k in data})

    def save(self, user: SessionUser) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(asdict(user), ensure_ascii=False, indent=2), encoding="utf-8")
        # holds the password
        os.chmod(self.path, 0o600)
        logger.info("Saved session for %s -> %s", user.username, self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("Cleared session %s", self.path)


def sign_in(client, store: SessionStore, username: str, password: str) -> SessionUser:
    """Log in through ``client`` and persist the user in ``store``.

    Raises ``ValidationError`` for blank input or a rejected login. On success
    the client is bound to the new user so later writes carry credentials.
    """
    username, password = username.strip(), password.strip()
    if not username or not password:
        raise ValidationError("กรุณากรอก Username และ Password")

    result = client.login(username, password)
    if not result.get("success"):
        raise ValidationError(result.get("error") or "เข้าสู่ระบบไม่สำเร็จ")

    user = SessionUser.from_response(result, password=password)
    store.save(user)
    client.user = user
    logger.info("Logged in as %s (%s)", user.username, user.role)
    return user


def sign_out(client, store: SessionStore) -> None:
    store.clear()
    client.user = None
