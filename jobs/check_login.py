"""Log in against the remote API and store the session file."""
from __future__ import annotations

import sys

from sheets.api_client import OfficeApiClient
from sheets.forms import ValidationError
from sheets.session import SessionStore, sign_in


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python -m jobs.check_login <username> <password>")
        raise SystemExit(1)
    store = SessionStore()
    try:
        user = sign_in(OfficeApiClient(), store, sys.argv[1], sys.argv[2])
    except ValidationError as exc:
        print("❌ Login failed:", exc)
        raise SystemExit(1)
    print(f"✅ Welcome, {user.name} ({user.role}) -> {store.path}")
