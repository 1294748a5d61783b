from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar

from jewepe_portal.clients.jewepe_sdk.http_client import CancelToken, HttpClient
from jewepe_portal.clients.jewepe_sdk.models import PageEnvelope
from jewepe_portal.clients.jewepe_sdk.normalizers import normalize_page, parse_model, unwrap_data

T = TypeVar("T")


class PageQuery(Protocol):
    page: int
    limit: int
    sort_key: str
    search_text: str
    status_filter: str | None


class ResourceClient(Generic[T]):
    """REST access to one managed entity.

    Subclasses set the endpoint paths, the search parameter name and the
    pydantic model used to parse items.
    """

    collection_path: str = ""
    list_path: str | None = None
    search_param: str = "q"
    model: Any = None

    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def parse_item(self, row: dict[str, Any]) -> T:
        return parse_model(self.model, row)

    def build_list_params(self, query: PageQuery) -> dict[str, Any]:
        return _build_query_params(
            page=query.page,
            limit=query.limit,
            sort=query.sort_key,
            **{self.search_param: (query.search_text or "").strip()},
            status=_plain(query.status_filter),
        )

    async def fetch_page(self, query: PageQuery, cancel_token: CancelToken | None = None) -> PageEnvelope[T]:
        payload = await self.http_client.request(
            "GET",
            self.list_path or self.collection_path,
            params=self.build_list_params(query),
            cancel_token=cancel_token,
        )
        return normalize_page(payload, self.parse_item, page=query.page, limit=query.limit)

    async def get(self, item_id: str) -> T:
        payload = await self.http_client.request("GET", f"{self.collection_path}/{item_id}")
        return self.parse_item(unwrap_data(payload))

    async def create(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self.http_client.request("POST", self.collection_path, json_body=body)

    async def update(self, item_id: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self.http_client.request("PUT", f"{self.collection_path}/{item_id}", json_body=body)

    async def delete(self, item_id: str) -> dict[str, Any]:
        return await self.http_client.request("DELETE", f"{self.collection_path}/{item_id}")

    async def set_status(self, item_id: str, status: str) -> dict[str, Any]:
        return await self.http_client.request(
            "PATCH",
            f"{self.collection_path}/{item_id}/status",
            json_body={"status": _plain(status)},
        )


def _plain(value: Any) -> Any:
    return getattr(value, "value", value)


def _build_query_params(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value not in (None, "")}
