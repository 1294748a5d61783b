from __future__ import annotations

from jewepe_portal.app.application.state.session_context import ADMIN_ROLE, SessionContext
from jewepe_portal.app.application.submit_result import SubmitResult
from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.app.ui.forms import LoginForm, validate_form
from jewepe_portal.clients.jewepe_sdk.auth_client import AuthClient
from jewepe_portal.clients.jewepe_sdk.errors import ApiError

logger = get_logger(__name__)

LOGIN_FAILED = "Gagal login. Periksa email/password Anda."
ADMIN_ONLY = "Akses ditolak. Login ini hanya untuk Admin."
LOGIN_SUCCESS = "Berhasil masuk sebagai Admin."


class LoginUseCase:
    def __init__(self, auth_client: AuthClient, session: SessionContext, notifications: NotificationCenter) -> None:
        self.auth_client = auth_client
        self.session = session
        self.notifications = notifications

    async def execute(self, email: str, password: str) -> SubmitResult:
        form = validate_form(LoginForm, {"email": email, "password": password})
        if not form.is_valid:
            return SubmitResult(ok=False, message=form.field_errors[form.first_invalid_field], field_errors=form.field_errors)

        try:
            result = await self.auth_client.login(form.values["email"], form.values["password"])
        except ApiError as exc:
            message = ErrorMapper.to_display_message(exc, LOGIN_FAILED)
            log_action(logger, "auth", "login", "error", trace_id=exc.trace_id, code=exc.code)
            self.notifications.error(message)
            return SubmitResult(ok=False, message=message)

        if result.user.role != ADMIN_ROLE:
            log_action(logger, "auth", "login", "rejected", role=result.user.role)
            self.notifications.error(ADMIN_ONLY)
            return SubmitResult(ok=False, message=ADMIN_ONLY)

        self.session.login(result.access_token, result.user)
        self.notifications.success(LOGIN_SUCCESS)
        return SubmitResult(ok=True, message=LOGIN_SUCCESS, data=result.user)
