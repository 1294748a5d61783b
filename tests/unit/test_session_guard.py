import base64
import json
from datetime import datetime, timezone

from jewepe_portal.app.application.state.session_context import SessionContext
from jewepe_portal.app.session_guard import SessionGuard, login_redirect, validate_token
from jewepe_portal.clients.jewepe_sdk.models import SessionUser


def _jwt(payload: dict) -> str:
    body = base64.urlsafe_b64encode(json.dumps(payload).encode("utf-8")).decode("utf-8").rstrip("=")
    return f"header.{body}.signature"


NOW = datetime(2026, 6, 1, tzinfo=timezone.utc)


def test_validate_token_reasons() -> None:
    assert validate_token(None).reason == "missing_token"
    assert validate_token(_jwt({"exp": NOW.timestamp() - 1}), now_utc=NOW).reason == "expired_token"
    assert validate_token(_jwt({"exp": "soon"}), now_utc=NOW).reason == "corrupt_token"
    assert validate_token("a.%%%.c", now_utc=NOW).reason == "corrupt_token"
    assert validate_token(_jwt({"exp": NOW.timestamp() + 60}), now_utc=NOW).valid
    assert validate_token(_jwt({"sub": "u1"}), now_utc=NOW).valid


def test_missing_session_redirects_to_login() -> None:
    result = SessionGuard(SessionContext()).require_session("/dashboard/katalog")

    assert result.allowed is False
    assert result.redirect_to == "/login?next=/dashboard/katalog"


def test_expired_session_is_cleared() -> None:
    session = SessionContext()
    session.login(_jwt({"exp": NOW.timestamp() - 10}), SessionUser(id="u1", role="ADMIN"))

    result = SessionGuard(session).require_session(now_utc=NOW)

    assert result.allowed is False
    assert result.reason == "expired_token"
    assert session.get_token() is None


def test_live_session_is_allowed() -> None:
    session = SessionContext()
    session.login(_jwt({"exp": NOW.timestamp() + 3600}), SessionUser(id="u1", role="ADMIN"))

    assert SessionGuard(session).require_session(now_utc=NOW).allowed


def test_login_redirect_default() -> None:
    assert login_redirect() == "/login?next=/dashboard"
