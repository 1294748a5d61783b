from __future__ import annotations

from typing import Any

from jewepe_portal.app.application.submit_result import SubmitResult
from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.app.ui.forms import ContactForm, validate_form
from jewepe_portal.clients.jewepe_sdk.contacts_client import ContactsClient
from jewepe_portal.clients.jewepe_sdk.errors import ApiError
from jewepe_portal.clients.jewepe_sdk.normalizers import unwrap_data

logger = get_logger(__name__)

SEND_FAILED = "Gagal mengirim pesan."


class SubmitContactUseCase:
    def __init__(self, contacts_client: ContactsClient, notifications: NotificationCenter) -> None:
        self.contacts_client = contacts_client
        self.notifications = notifications

    async def execute(self, values: dict[str, Any]) -> SubmitResult:
        form = validate_form(ContactForm, values)
        if not form.is_valid:
            return SubmitResult(ok=False, message=form.field_errors[form.first_invalid_field], field_errors=form.field_errors)

        try:
            payload = await self.contacts_client.create(form.values)
        except ApiError as exc:
            message = ErrorMapper.to_display_message(exc, SEND_FAILED)
            log_action(logger, "contact", "submit", "error", trace_id=exc.trace_id, code=exc.code)
            self.notifications.error(message)
            return SubmitResult(ok=False, message=message)

        data = unwrap_data(payload)
        contact_id = data.get("id") if isinstance(data, dict) else None
        if contact_id:
            message = f"Pesan terkirim! ID: {contact_id}"
        else:
            message = "Pesan terkirim! Kami akan membalas via email."
        log_action(logger, "contact", "submit", "success", contact_id=contact_id)
        self.notifications.success(message)
        return SubmitResult(ok=True, message=message, data=contact_id)
