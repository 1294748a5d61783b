from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.clients.jewepe_sdk.errors import ApiError
from jewepe_portal.clients.jewepe_sdk.reports_client import CsvDownload, ReportsClient

logger = get_logger(__name__)

EXPORT_SUCCESS = "CSV berhasil diunduh."
EXPORT_FAILED = "Gagal mengekspor CSV."
FALLBACK_FILENAME = "orders.csv"


def save_download(download: CsvDownload, output_dir: str | Path) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    path = destination / (download.filename or FALLBACK_FILENAME)
    path.write_bytes(download.content)
    return path


@dataclass
class OrdersCsvExporter:
    """One-shot export of all orders; runs outside any list refresh."""

    reports_client: ReportsClient
    notifications: NotificationCenter
    output_dir: Path = Path("out/exports")

    async def export(self) -> Path | None:
        try:
            download = await self.reports_client.export_orders_csv(fallback_name=FALLBACK_FILENAME)
        except ApiError as exc:
            log_action(logger, "orders", "export_csv", "error", trace_id=exc.trace_id, code=exc.code)
            self.notifications.error(ErrorMapper.to_display_message(exc, EXPORT_FAILED))
            return None
        path = save_download(download, self.output_dir)
        log_action(logger, "orders", "export_csv", "success", path=str(path), size=len(download.content))
        self.notifications.success(EXPORT_SUCCESS)
        return path
