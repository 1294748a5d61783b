from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from jewepe_portal.clients.jewepe_sdk.errors import GENERIC_MESSAGE, ServerError
from jewepe_portal.clients.jewepe_sdk.models import PageEnvelope, PageMeta

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

logger = logging.getLogger(__name__)


def normalize_page(
    payload: Any,
    parse_item: Callable[[dict[str, Any]], T],
    *,
    page: int = 1,
    limit: int = 10,
) -> PageEnvelope[T]:
    """Turn a ``{status, meta, data}`` list response into a PageEnvelope.

    Missing meta fields are derived from ``total`` and ``limit``.
    """
    safe_page = max(1, int(page or 1))
    safe_limit = max(1, int(limit or 10))

    rows: list[Any] = []
    meta: dict[str, Any] = {}
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        if isinstance(payload.get("data"), list):
            rows = payload["data"]
        elif isinstance(payload.get("items"), list):
            rows = payload["items"]
        if isinstance(payload.get("meta"), dict):
            meta = payload["meta"]

    safe_page = _to_int(meta.get("page")) or safe_page
    safe_limit = _to_int(meta.get("limit")) or safe_limit
    total = _to_int(meta.get("total"))
    if total is None:
        total = (safe_page - 1) * safe_limit + len(rows)
    total = max(0, total)

    derived = PageMeta.derive(safe_page, safe_limit, total)
    page_count = _to_int(meta.get("pageCount"))
    has_next = _to_bool(meta.get("hasNext"))
    has_prev = _to_bool(meta.get("hasPrev"))
    resolved = PageMeta(
        page=safe_page,
        limit=safe_limit,
        total=total,
        page_count=page_count if page_count is not None else derived.page_count,
        has_next=has_next if has_next is not None else derived.has_next,
        has_prev=has_prev if has_prev is not None else derived.has_prev,
    )

    if len(rows) > safe_limit:
        logger.warning("list response carried %s items for limit %s; truncating", len(rows), safe_limit)
        rows = rows[:safe_limit]

    items = tuple(parse_item(row) for row in rows if isinstance(row, dict))
    return PageEnvelope(items=items, meta=resolved)


def unwrap_data(payload: dict[str, Any]) -> Any:
    """Return ``payload["data"]`` for success envelopes, else the payload itself."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def _to_int(value: Any) -> int | None:
    try:
        if value is None or value == "" or isinstance(value, bool):
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    return None


def parse_model(model: type[M], data: Any) -> M:
    """Validate a response body, turning schema mismatches into ``ServerError``."""
    try:
        return model.model_validate(data)
    except SchemaError as exc:
        raise ServerError(code="INVALID_RESPONSE", human_message=GENERIC_MESSAGE, details=str(exc)) from exc
