from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

GENERIC_MESSAGE = "Terjadi kesalahan, coba lagi."
NETWORK_MESSAGE = "Tidak dapat terhubung ke server. Periksa koneksi Anda lalu coba lagi."
TIMEOUT_MESSAGE = "Server terlalu lama merespons. Silakan coba lagi."


@dataclass
class ApiError(Exception):
    """Typed failure built at the transport boundary.

    ``human_message`` is always safe to show; ``server_message`` is the
    backend's own ``message`` when the response carried one.
    """

    code: str
    human_message: str
    details: Any = None
    trace_id: str | None = None
    status_code: int | None = None
    server_message: str | None = None

    def __str__(self) -> str:
        status = f"[{self.status_code}] " if self.status_code else ""
        return f"{status}{self.code}: {self.human_message}"


class NetworkError(ApiError):
    """No response was received (connection failure or timeout)."""


class ServerError(ApiError):
    """The backend answered with a non-2xx status."""


class AuthError(ServerError):
    """401: the bearer credential is missing, invalid or expired."""


class PermissionDeniedError(ServerError):
    """403: authenticated but not allowed."""


class RequestCancelledError(ApiError):
    """The request was superseded; never surfaced to users."""


@dataclass
class ValidationError(ApiError):
    """Client-side schema check failed before any request was sent."""

    field_errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_field_errors(cls, field_errors: dict[str, str]) -> "ValidationError":
        first = next(iter(field_errors.values()), GENERIC_MESSAGE)
        return cls(code="VALIDATION_ERROR", human_message=first, details=dict(field_errors), field_errors=dict(field_errors))


def cancelled(trace_id: str | None = None) -> RequestCancelledError:
    return RequestCancelledError(code="REQUEST_CANCELLED", human_message="Request superseded", trace_id=trace_id)


def from_http_response(response: httpx.Response) -> ServerError:
    trace_id = response.headers.get("X-Trace-ID") or response.headers.get("X-Trace-Id")
    try:
        payload = response.json()
    except ValueError:
        payload = None

    server_message: str | None = None
    code = "HTTP_ERROR"
    details: Any = None
    if isinstance(payload, dict):
        raw_message = payload.get("message")
        if isinstance(raw_message, str) and raw_message.strip():
            server_message = raw_message.strip()
        code = str(payload.get("code") or code)
        details = payload.get("details") or payload.get("errors")
        trace_id = payload.get("trace_id") or trace_id

    mapped: type[ServerError]
    if response.status_code == 401:
        mapped = AuthError
    elif response.status_code == 403:
        mapped = PermissionDeniedError
    else:
        mapped = ServerError
    return mapped(
        code=code,
        human_message=server_message or GENERIC_MESSAGE,
        details=details,
        trace_id=trace_id,
        status_code=response.status_code,
        server_message=server_message,
    )
