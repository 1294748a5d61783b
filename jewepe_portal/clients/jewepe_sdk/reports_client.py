from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote

from jewepe_portal.clients.jewepe_sdk.http_client import HttpClient
from jewepe_portal.clients.jewepe_sdk.models import OrdersSummary, RevenueSummary, TopPackage
from jewepe_portal.clients.jewepe_sdk.normalizers import parse_model, unwrap_data

_FILENAME_PATTERN = re.compile(r"filename\*=UTF-8''([^;]+)|filename=\"?([^\";]+)\"?", re.IGNORECASE)


@dataclass(frozen=True)
class CsvDownload:
    filename: str
    content: bytes


class ReportsClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def orders_summary(self) -> OrdersSummary:
        payload = await self.http_client.request("GET", "/reports/orders/summary")
        return parse_model(OrdersSummary, unwrap_data(payload) or {})

    async def revenue_summary(self) -> RevenueSummary:
        payload = await self.http_client.request("GET", "/reports/revenue/summary")
        return parse_model(RevenueSummary, unwrap_data(payload) or {})

    async def top_packages(self, limit: int = 3) -> list[TopPackage]:
        payload = await self.http_client.request("GET", "/reports/packages/top", params={"limit": limit})
        rows = unwrap_data(payload)
        return [parse_model(TopPackage, row) for row in rows or [] if isinstance(row, dict)]

    async def export_orders_csv(self, fallback_name: str = "orders.csv") -> CsvDownload:
        response = await self.http_client.send("GET", "/reports/orders/export/csv", headers={"Accept": "text/csv"})
        filename = filename_from_disposition(response.headers.get("Content-Disposition"), fallback_name)
        return CsvDownload(filename=filename, content=response.content)


def filename_from_disposition(header: str | None, fallback: str) -> str:
    if not header:
        return fallback
    match = _FILENAME_PATTERN.search(header)
    if not match:
        return fallback
    raw = match.group(1) or match.group(2)
    name = unquote(raw).strip()
    # basename only
    name = name.replace("\\", "/").rsplit("/", 1)[-1]
    return name or fallback
