from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import quote

from jewepe_portal.app.application.state.session_context import SessionContext

LOGIN_PATH = "/login"
DEFAULT_NEXT = "/dashboard"


@dataclass(frozen=True)
class SessionValidation:
    valid: bool
    reason: str | None = None


@dataclass(frozen=True)
class GuardResult:
    allowed: bool
    redirect_to: str | None = None
    reason: str | None = None


def validate_token(token: str | None, now_utc: datetime | None = None) -> SessionValidation:
    if not token:
        return SessionValidation(valid=False, reason="missing_token")

    parts = token.split(".")
    if len(parts) != 3:
        # opaque tokens are left to the backend
        return SessionValidation(valid=True)

    payload_part = parts[1]
    padded = payload_part + ("=" * (-len(payload_part) % 4))
    try:
        decoded = base64.urlsafe_b64decode(padded.encode("utf-8")).decode("utf-8")
        payload = json.loads(decoded)
    except (ValueError, UnicodeDecodeError):
        return SessionValidation(valid=False, reason="corrupt_token")

    exp = payload.get("exp") if isinstance(payload, dict) else None
    if exp is None:
        return SessionValidation(valid=True)
    if not isinstance(exp, (int, float)):
        return SessionValidation(valid=False, reason="corrupt_token")

    now = now_utc or datetime.now(tz=timezone.utc)
    if float(exp) <= now.timestamp():
        return SessionValidation(valid=False, reason="expired_token")
    return SessionValidation(valid=True)


def login_redirect(next_path: str = DEFAULT_NEXT) -> str:
    return f"{LOGIN_PATH}?next={quote(next_path or DEFAULT_NEXT, safe='/')}"


class SessionGuard:
    """Admin screens mount only behind a live session."""

    def __init__(self, session: SessionContext) -> None:
        self.session = session

    def require_session(self, next_path: str = DEFAULT_NEXT, now_utc: datetime | None = None) -> GuardResult:
        validation = validate_token(self.session.get_token(), now_utc=now_utc)
        if validation.valid:
            return GuardResult(allowed=True)
        if validation.reason != "missing_token":
            self.session.logout()
        return GuardResult(allowed=False, redirect_to=login_redirect(next_path), reason=validation.reason)
