from __future__ import annotations

import asyncio

from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.clients.jewepe_sdk.errors import ApiError
from jewepe_portal.clients.jewepe_sdk.models import OverviewData
from jewepe_portal.clients.jewepe_sdk.reports_client import ReportsClient

logger = get_logger(__name__)

LOAD_FAILED = "Gagal memuat data dashboard."


class DashboardOverviewUseCase:
    def __init__(self, reports_client: ReportsClient, notifications: NotificationCenter, top_limit: int = 3) -> None:
        self.reports_client = reports_client
        self.notifications = notifications
        self.top_limit = top_limit

    async def execute(self) -> OverviewData | None:
        try:
            summary, revenue, top_packages = await asyncio.gather(
                self.reports_client.orders_summary(),
                self.reports_client.revenue_summary(),
                self.reports_client.top_packages(limit=self.top_limit),
            )
        except ApiError as exc:
            log_action(logger, "dashboard", "overview", "error", trace_id=exc.trace_id, code=exc.code)
            self.notifications.error(ErrorMapper.to_display_message(exc, LOAD_FAILED))
            return None
        log_action(logger, "dashboard", "overview", "success", total_orders=summary.total)
        return OverviewData(summary=summary, revenue=revenue, top_packages=top_packages)
