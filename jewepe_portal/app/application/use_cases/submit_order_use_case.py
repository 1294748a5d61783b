from __future__ import annotations

from typing import Any

from jewepe_portal.app.application.submit_result import SubmitResult
from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.app.ui.forms import OrderForm, validate_form
from jewepe_portal.clients.jewepe_sdk.errors import ApiError
from jewepe_portal.clients.jewepe_sdk.normalizers import unwrap_data
from jewepe_portal.clients.jewepe_sdk.orders_client import OrdersClient

logger = get_logger(__name__)


class SubmitOrderUseCase:
    """Public booking: validate the form, POST /orders, report the order code."""

    def __init__(self, orders_client: OrdersClient, notifications: NotificationCenter) -> None:
        self.orders_client = orders_client
        self.notifications = notifications

    async def execute(self, values: dict[str, Any]) -> SubmitResult:
        form = validate_form(OrderForm, values)
        if not form.is_valid:
            return SubmitResult(ok=False, message=form.field_errors[form.first_invalid_field], field_errors=form.field_errors)

        try:
            payload = await self.orders_client.create(form.values)
        except ApiError as exc:
            message = ErrorMapper.to_display_message(exc)
            log_action(logger, "booking", "submit", "error", trace_id=exc.trace_id, code=exc.code)
            self.notifications.error(message)
            return SubmitResult(ok=False, message=message)

        data = unwrap_data(payload)
        order_code = data.get("orderCode") if isinstance(data, dict) else None
        message = f"Pemesanan berhasil. Kode Anda: {order_code}"
        log_action(logger, "booking", "submit", "success", order_code=order_code)
        self.notifications.success(message)
        return SubmitResult(ok=True, message=message, data=order_code)
