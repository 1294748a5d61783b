from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Protocol

import httpx

from jewepe_portal.clients.jewepe_sdk.config import SDKConfig
from jewepe_portal.clients.jewepe_sdk.errors import (
    NETWORK_MESSAGE,
    TIMEOUT_MESSAGE,
    ApiError,
    AuthError,
    NetworkError,
    cancelled,
    from_http_response,
)


class CancelToken(Protocol):
    @property
    def cancelled(self) -> bool: ...


TokenProvider = Callable[[], str | None]


class HttpClient:
    """Async JSON transport for the wedding-organizer API.

    GET requests are retried on transport failures and 5xx answers; writes
    are sent exactly once. A ``cancel_token`` is checked before dispatch and
    again when the response arrives, so a superseded request never reaches
    the caller's state.
    """

    def __init__(
        self,
        config: SDKConfig | None = None,
        client: httpx.AsyncClient | None = None,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or SDKConfig.from_env()
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )
        self._retry_max_attempts = max(1, self.config.retry_max_attempts)
        self._retry_backoff_ms = max(0, self.config.retry_backoff_ms)
        self._token_provider = token_provider
        self._auth_error_handler: Callable[[ApiError], None] | None = None

    def set_token_provider(self, provider: TokenProvider | None) -> None:
        self._token_provider = provider

    def register_auth_error_handler(self, handler: Callable[[ApiError], None] | None) -> None:
        self._auth_error_handler = handler

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        cancel_token: CancelToken | None = None,
    ) -> dict[str, Any]:
        response = await self.send(
            method,
            path,
            json_body=json_body,
            params=params,
            headers=headers,
            cancel_token=cancel_token,
        )
        return _safe_json(response)

    async def send(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        cancel_token: CancelToken | None = None,
    ) -> httpx.Response:
        request_headers = dict(headers or {})
        token = self._token_provider() if self._token_provider else None
        if token:
            request_headers["Authorization"] = f"Bearer {token}"

        normalized_path = path if path.startswith("/") else f"/{path}"
        allow_retry = method.upper() == "GET"

        for attempt in range(1, self._retry_max_attempts + 1):
            if cancel_token is not None and cancel_token.cancelled:
                raise cancelled()
            try:
                response = await self._client.request(
                    method.upper(),
                    normalized_path,
                    json=json_body,
                    params=params,
                    headers=request_headers,
                )
            except httpx.TimeoutException as exc:
                if (not allow_retry) or attempt >= self._retry_max_attempts:
                    raise NetworkError(code="TIMEOUT_ERROR", human_message=TIMEOUT_MESSAGE, details=str(exc)) from exc
                await self._backoff(attempt)
                continue
            except httpx.TransportError as exc:
                if (not allow_retry) or attempt >= self._retry_max_attempts:
                    raise NetworkError(code="NETWORK_ERROR", human_message=NETWORK_MESSAGE, details=str(exc)) from exc
                await self._backoff(attempt)
                continue

            if cancel_token is not None and cancel_token.cancelled:
                raise cancelled(response.headers.get("X-Trace-ID"))

            if response.status_code >= 400:
                error = from_http_response(response)
                if allow_retry and _is_retryable_status(response.status_code) and attempt < self._retry_max_attempts:
                    await self._backoff(attempt)
                    continue
                if isinstance(error, AuthError) and self._auth_error_handler:
                    self._auth_error_handler(error)
                raise error
            return response

        raise NetworkError(code="NETWORK_ERROR", human_message=NETWORK_MESSAGE, details="retry exhausted")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _backoff(self, attempt: int) -> None:
        await asyncio.sleep((self._retry_backoff_ms * attempt) / 1000)


def _is_retryable_status(status_code: int) -> bool:
    return 500 <= status_code <= 599


def _safe_json(response: httpx.Response) -> dict[str, Any]:
    if not response.content:
        return {}
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {"data": payload}
