from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any

from jewepe_portal.clients.jewepe_sdk.models import PageEnvelope, PageMeta


@dataclass
class Row:
    id: str
    name: str = ""
    status: str = "PENDING"
    price: int = 0


def envelope(items: list[Any], page: int = 1, limit: int = 10, total: int | None = None) -> PageEnvelope[Any]:
    resolved_total = len(items) if total is None else total
    return PageEnvelope(items=tuple(items), meta=PageMeta.derive(page, limit, resolved_total))


class FakeTimer:
    def __init__(self, due_ms: float, callback) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock for debounce timers, in milliseconds."""

    def __init__(self) -> None:
        self.now_ms = 0.0
        self.timers: list[FakeTimer] = []

    def __call__(self, delay_seconds: float, callback) -> FakeTimer:
        timer = FakeTimer(self.now_ms + delay_seconds * 1000, callback)
        self.timers.append(timer)
        return timer

    def advance_to(self, target_ms: float) -> None:
        while True:
            due = sorted(
                (t for t in self.timers if not t.cancelled and t.due_ms <= target_ms),
                key=lambda t: t.due_ms,
            )
            if not due:
                break
            timer = due[0]
            self.timers.remove(timer)
            self.now_ms = timer.due_ms
            timer.callback()
        self.now_ms = target_ms


class InstantSource:
    """Page source answering from an in-memory row list."""

    def __init__(self, rows: list[Row] | None = None, total: int | None = None) -> None:
        self.rows = rows or []
        self.total = total
        self.queries: list[Any] = []
        self.error: Exception | None = None

    async def fetch_page(self, query, cancel_token=None):
        self.queries.append(query)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        start = (query.page - 1) * query.limit
        total = self.total if self.total is not None else len(self.rows)
        return envelope(self.rows[start : start + query.limit], page=query.page, limit=query.limit, total=total)


class GatedSource:
    """Page source whose answers are released by the test, in any order."""

    def __init__(self) -> None:
        self.queries: list[Any] = []
        self.gates: list[asyncio.Future] = []

    async def fetch_page(self, query, cancel_token=None):
        self.queries.append(query)
        gate = asyncio.get_running_loop().create_future()
        self.gates.append(gate)
        result = await gate
        if isinstance(result, Exception):
            raise result
        return result


@dataclass
class StubResource:
    """Mutable backing store for mutation tests; also serves list pages."""

    rows: dict[str, Row] = field(default_factory=dict)
    calls: list[tuple[str, Any]] = field(default_factory=list)
    fail_with: Exception | None = None
    gate: asyncio.Event | None = None

    async def _maybe_wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)

    async def fetch_page(self, query, cancel_token=None):
        self.calls.append(("list", query.page))
        await asyncio.sleep(0)
        items = list(self.rows.values())
        start = (query.page - 1) * query.limit
        return envelope(items[start : start + query.limit], page=query.page, limit=query.limit, total=len(items))

    async def create(self, body):
        self.calls.append(("create", body))
        await self._maybe_wait()
        if self.fail_with:
            raise self.fail_with
        new_id = f"new-{len(self.rows) + 1}"
        self.rows[new_id] = Row(id=new_id, name=body.get("name", ""))
        return {"data": {"id": new_id}}

    async def update(self, item_id, body):
        self.calls.append(("update", item_id))
        await self._maybe_wait()
        if self.fail_with:
            raise self.fail_with
        self.rows[item_id] = replace(self.rows[item_id], name=body.get("name", ""))
        return {"data": {"id": item_id}}

    async def delete(self, item_id):
        self.calls.append(("delete", item_id))
        await self._maybe_wait()
        if self.fail_with:
            raise self.fail_with
        self.rows.pop(item_id, None)
        return {}

    async def set_status(self, item_id, status):
        self.calls.append(("set_status", (item_id, status)))
        await self._maybe_wait()
        if self.fail_with:
            raise self.fail_with
        self.rows[item_id] = replace(self.rows[item_id], status=status)
        return {"data": {"id": item_id, "status": status}}
