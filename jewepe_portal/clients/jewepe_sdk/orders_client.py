from __future__ import annotations

from jewepe_portal.clients.jewepe_sdk.models import Order
from jewepe_portal.clients.jewepe_sdk.normalizers import normalize_page
from jewepe_portal.clients.jewepe_sdk.resource_client import ResourceClient

CHECK_PATH = "/orders/check"


class OrdersClient(ResourceClient[Order]):
    collection_path = "/orders"
    search_param = "q"
    model = Order

    async def check_by_code(self, code: str) -> Order | None:
        payload = await self.http_client.request("GET", CHECK_PATH, params={"code": code, "page": 1, "limit": 1})
        envelope = normalize_page(payload, self.parse_item, page=1, limit=1)
        return envelope.items[0] if envelope.items else None

    async def check_by_email(self, email: str, limit: int = 50) -> list[Order]:
        payload = await self.http_client.request("GET", CHECK_PATH, params={"email": email, "page": 1, "limit": limit})
        return list(normalize_page(payload, self.parse_item, page=1, limit=limit).items)
