from __future__ import annotations

from pydantic import ValidationError as SchemaError

from jewepe_portal.clients.jewepe_sdk.errors import ServerError
from jewepe_portal.clients.jewepe_sdk.http_client import HttpClient
from jewepe_portal.clients.jewepe_sdk.models import LoginResult
from jewepe_portal.clients.jewepe_sdk.normalizers import unwrap_data

INCOMPLETE_RESPONSE = "Respon server tidak lengkap."


class AuthClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def login(self, email: str, password: str) -> LoginResult:
        payload = await self.http_client.request(
            "POST",
            "/auth/login",
            json_body={"email": email, "password": password},
        )
        data = unwrap_data(payload)
        if not isinstance(data, dict) or not data.get("accessToken") or not isinstance(data.get("user"), dict):
            raise _incomplete()
        try:
            return LoginResult.model_validate(data)
        except SchemaError as exc:
            raise _incomplete(str(exc)) from exc


def _incomplete(details: str | None = None) -> ServerError:
    return ServerError(
        code="INCOMPLETE_RESPONSE",
        human_message=INCOMPLETE_RESPONSE,
        details=details,
        status_code=200,
        server_message=INCOMPLETE_RESPONSE,
    )
