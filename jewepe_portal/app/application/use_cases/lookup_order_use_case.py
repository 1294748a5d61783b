from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.ui.forms import OrderCodeLookup, OrderEmailLookup, validate_form
from jewepe_portal.clients.jewepe_sdk.errors import ApiError
from jewepe_portal.clients.jewepe_sdk.models import Order, OrderStatus
from jewepe_portal.clients.jewepe_sdk.orders_client import OrdersClient

logger = get_logger(__name__)

CODE_NOT_FOUND = "Data pesanan tidak ditemukan."
EMAIL_NOT_FOUND = "Tidak ada pesanan untuk email tersebut."


class CustomerStatus(str, Enum):
    MENUNGGU_KONFIRMASI = "MENUNGGU_KONFIRMASI"
    DIKONFIRMASI = "DIKONFIRMASI"
    DIBATALKAN = "DIBATALKAN"


STATUS_LABELS = {
    CustomerStatus.MENUNGGU_KONFIRMASI: "Menunggu Konfirmasi",
    CustomerStatus.DIKONFIRMASI: "Dikonfirmasi",
    CustomerStatus.DIBATALKAN: "Dibatalkan",
}

PROGRESS_STEPS = (CustomerStatus.MENUNGGU_KONFIRMASI, CustomerStatus.DIKONFIRMASI)


def to_customer_status(status: OrderStatus | str) -> CustomerStatus:
    """Map the admin order lifecycle onto the customer-facing one.

    The admin vocabulary is canonical; anything unknown reads as waiting.
    """
    value = getattr(status, "value", status)
    if value == OrderStatus.APPROVED.value:
        return CustomerStatus.DIKONFIRMASI
    if value == OrderStatus.REJECTED.value:
        return CustomerStatus.DIBATALKAN
    return CustomerStatus.MENUNGGU_KONFIRMASI


def step_progress(status: CustomerStatus) -> int:
    if status is CustomerStatus.DIBATALKAN:
        return 0
    if status not in PROGRESS_STEPS:
        return 0
    return round((PROGRESS_STEPS.index(status) + 1) / len(PROGRESS_STEPS) * 100)


@dataclass(frozen=True)
class OrderDetail:
    order_code: str
    package_name: str
    status: CustomerStatus
    progress: int
    event_date: str | None = None
    customer_name: str | None = None
    email: str | None = None
    total: int | None = None

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]

    @classmethod
    def from_order(cls, order: Order) -> "OrderDetail":
        status = to_customer_status(order.status)
        return cls(
            order_code=order.order_code,
            package_name=order.package.name if order.package else "Paket",
            status=status,
            progress=step_progress(status),
            event_date=order.event_date,
            customer_name=order.customer_name,
            email=order.customer_email,
            total=order.total_price,
        )


@dataclass(frozen=True)
class LookupResult:
    details: list[OrderDetail] = field(default_factory=list)
    error: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return bool(self.details)


class LookupOrderUseCase:
    """Customer order-status checker, by order code or by email."""

    def __init__(self, orders_client: OrdersClient) -> None:
        self.orders_client = orders_client

    async def by_code(self, code: str) -> LookupResult:
        form = validate_form(OrderCodeLookup, {"order_code": code})
        if not form.is_valid:
            return LookupResult(error=form.field_errors["order_code"], field_errors=form.field_errors)
        try:
            order = await self.orders_client.check_by_code(form.values["order_code"])
        except ApiError as exc:
            log_action(logger, "order_check", "by_code", "error", trace_id=exc.trace_id, code=exc.code)
            return LookupResult(error=ErrorMapper.to_display_message(exc))
        if order is None:
            return LookupResult(error=CODE_NOT_FOUND)
        return LookupResult(details=[OrderDetail.from_order(order)])

    async def by_email(self, email: str) -> LookupResult:
        form = validate_form(OrderEmailLookup, {"email": email})
        if not form.is_valid:
            return LookupResult(error=form.field_errors["email"], field_errors=form.field_errors)
        try:
            orders = await self.orders_client.check_by_email(form.values["email"])
        except ApiError as exc:
            log_action(logger, "order_check", "by_email", "error", trace_id=exc.trace_id, code=exc.code)
            return LookupResult(error=ErrorMapper.to_display_message(exc))
        if not orders:
            return LookupResult(error=EMAIL_NOT_FOUND)
        return LookupResult(details=[OrderDetail.from_order(order) for order in orders])
