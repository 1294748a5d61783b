from __future__ import annotations

import asyncio
import logging
from typing import Any, Generic, TypeVar

from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.listing.cancellation import CancellationGuard, RequestToken
from jewepe_portal.app.listing.controller import PageSource
from jewepe_portal.app.listing.debounce import DebouncedValue, Scheduler
from jewepe_portal.app.listing.query import ListQuery
from jewepe_portal.clients.jewepe_sdk.errors import ApiError, RequestCancelledError
from jewepe_portal.clients.jewepe_sdk.models import PageMeta

T = TypeVar("T")

logger = get_logger(__name__)


class TypeaheadController(Generic[T]):
    """Picker list that appends pages on "load more".

    A new search replaces the list with its first page; ``load_more`` fetches
    the next page of the same search and appends it. Failures leave the
    current options in place and are reported when the form is submitted.
    """

    def __init__(
        self,
        source: PageSource[T],
        *,
        limit: int = 10,
        sort_key: str = "az",
        quiet_ms: int = 300,
        scheduler: Scheduler | None = None,
        module: str = "typeahead",
    ) -> None:
        self.source = source
        self.query = ListQuery(page=1, limit=limit, sort_key=sort_key)
        self.items: list[T] = []
        self.meta: PageMeta | None = None
        self.loading = False
        self.fetching_more = False
        self.error_message: str | None = None
        self.module = module
        self.search = DebouncedValue("", quiet_ms=quiet_ms, on_commit=self._on_search_committed, scheduler=scheduler)
        self._guard = CancellationGuard()
        self._task: asyncio.Task[None] | None = None

    def open(self) -> asyncio.Task[None]:
        return self._start(self.query.with_changes(page=1), append=False)

    def set_search(self, text: str) -> None:
        self.search.set(text)

    def load_more(self) -> bool:
        if self.meta is None or not self.meta.has_next or self.loading or self.fetching_more:
            return False
        self._start(self.query.with_changes(page=self.query.page + 1), append=True)
        return True

    def find(self, item_id: str) -> T | None:
        return next((item for item in self.items if getattr(item, "id", None) == item_id), None)

    async def settle(self) -> None:
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    def close(self) -> None:
        self.search.cancel()
        self._guard.cancel_all()
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def _on_search_committed(self, text: str) -> None:
        self._start(self.query.with_changes(search_text=text, page=1), append=False)

    def _start(self, query: ListQuery, *, append: bool) -> asyncio.Task[None]:
        token = self._guard.begin()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        if append:
            self.fetching_more = True
        else:
            self.loading = True
        self._task = asyncio.get_running_loop().create_task(self._load(token, query, append))
        return self._task

    async def _load(self, token: RequestToken, query: ListQuery, append: bool) -> None:
        try:
            envelope = await self.source.fetch_page(query, cancel_token=token)
        except asyncio.CancelledError:
            if not token.cancelled:
                raise
            return
        except RequestCancelledError:
            return
        except ApiError as exc:
            if self._guard.is_current(token):
                self.error_message = ErrorMapper.to_display_message(exc)
                self._finish()
            log_action(logger, self.module, "load", "error", trace_id=exc.trace_id, level=logging.WARNING, code=exc.code)
            return

        if not self._guard.is_current(token):
            return
        rows: list[Any] = list(envelope.items)
        self.items = self.items + rows if append else rows
        self.meta = envelope.meta
        self.query = query
        self.error_message = None
        self._finish()
        log_action(logger, self.module, "load", "success", page=query.page, count=len(self.items))

    def _finish(self) -> None:
        self.loading = False
        self.fetching_more = False
