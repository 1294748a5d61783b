from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Generic, Protocol, TypeVar

from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.listing.cancellation import CancellationGuard, RequestToken
from jewepe_portal.app.listing.debounce import DebouncedValue, Scheduler
from jewepe_portal.app.listing.query import ListQuery
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.app.ui.pagination import summary_text
from jewepe_portal.clients.jewepe_sdk.errors import GENERIC_MESSAGE, ApiError, RequestCancelledError
from jewepe_portal.clients.jewepe_sdk.models import PageEnvelope, PageMeta

T = TypeVar("T")

logger = get_logger(__name__)


class ListState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


class PageSource(Protocol[T]):
    async def fetch_page(self, query: ListQuery, cancel_token: RequestToken | None = None) -> PageEnvelope[T]: ...


class ListController(Generic[T]):
    """Search/sort/filter/paginate loop over one paged endpoint.

    Every committed query change enters ``LOADING`` and starts exactly one
    fetch. Results are applied only while their token is still current, so
    the last committed query wins regardless of response order. A failed
    fetch keeps the previous items and meta on screen.
    """

    def __init__(
        self,
        source: PageSource[T],
        *,
        query: ListQuery | None = None,
        notifications: NotificationCenter | None = None,
        load_error_message: str = GENERIC_MESSAGE,
        debounce_ms: int = 350,
        scheduler: Scheduler | None = None,
        abort_in_flight: bool = True,
        module: str = "listing",
    ) -> None:
        self.source = source
        self.default_query = query or ListQuery()
        self.query = self.default_query
        self.notifications = notifications or NotificationCenter()
        self.load_error_message = load_error_message
        self.abort_in_flight = abort_in_flight
        self.module = module

        self.state = ListState.IDLE
        self.items: tuple[T, ...] = ()
        self.meta: PageMeta | None = None
        self.error_message: str | None = None

        self.search = DebouncedValue(
            self.query.search_text,
            quiet_ms=debounce_ms,
            on_commit=self._on_search_committed,
            scheduler=scheduler,
        )
        self._guard = CancellationGuard()
        self._task: asyncio.Task[None] | None = None

    @property
    def loading(self) -> bool:
        return self.state is ListState.LOADING

    def mount(self) -> asyncio.Task[None]:
        return self._start_load()

    def refresh(self) -> asyncio.Task[None]:
        return self._start_load()

    def next(self) -> bool:
        # bounded by the committed page; meta may still describe the previous one
        if self.meta is None or self.query.page >= self.meta.page_count:
            return False
        self._apply(page=self.query.page + 1)
        return True

    def prev(self) -> bool:
        if self.meta is None or self.query.page <= 1:
            return False
        self._apply(page=self.query.page - 1)
        return True

    def go_to(self, page: int) -> bool:
        if self.meta is None or page < 1 or page == self.query.page:
            return False
        if page > self.meta.page_count:
            return False
        self._apply(page=page)
        return True

    def set_limit(self, limit: int) -> asyncio.Task[None] | None:
        return self._apply(limit=limit)

    def set_sort(self, sort_key: str) -> asyncio.Task[None] | None:
        return self._apply(sort_key=sort_key)

    def set_status_filter(self, status_filter: str | None) -> asyncio.Task[None] | None:
        return self._apply(status_filter=status_filter)

    def set_search(self, text: str) -> None:
        """Record a keystroke; the query changes once the input settles."""
        self.search.set(text)

    def reset(self) -> asyncio.Task[None]:
        return self.apply_query(self.default_query)

    def apply_query(self, query: ListQuery) -> asyncio.Task[None]:
        """Replace the whole query at once and load it."""
        self.search.reset(query.search_text)
        self.query = query
        return self._start_load()

    async def settle(self) -> None:
        """Wait until the most recent fetch has finished."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    def close(self) -> None:
        self.search.cancel()
        self._guard.cancel_all()
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def summary(self) -> str:
        return summary_text(len(self.items), self.meta)

    def _on_search_committed(self, text: str) -> None:
        self._apply(search_text=text)

    def _apply(self, **changes: object) -> asyncio.Task[None] | None:
        updated = self.query.with_changes(**changes)
        if updated == self.query:
            return None
        self.query = updated
        return self._start_load()

    def _start_load(self) -> asyncio.Task[None]:
        token = self._guard.begin()
        previous = self._task
        if self.abort_in_flight and previous is not None and not previous.done():
            previous.cancel()
        self.state = ListState.LOADING
        self._task = asyncio.get_running_loop().create_task(self._load(token, self.query))
        return self._task

    async def _load(self, token: RequestToken, query: ListQuery) -> None:
        log_action(logger, self.module, "load", "start", level=logging.DEBUG, seq=token.seq, page=query.page)
        try:
            envelope = await self.source.fetch_page(query, cancel_token=token)
        except asyncio.CancelledError:
            if not token.cancelled:
                raise
            self._discard(token, "aborted")
            return
        except RequestCancelledError:
            self._discard(token, "cancelled")
            return
        except ApiError as exc:
            if not self._guard.is_current(token):
                self._discard(token, "stale_error")
                return
            self.error_message = ErrorMapper.to_display_message(exc, self.load_error_message)
            self.state = ListState.ERRORED
            log_action(
                logger,
                self.module,
                "load",
                "error",
                trace_id=exc.trace_id,
                level=logging.WARNING,
                seq=token.seq,
                code=exc.code,
            )
            self.notifications.error(self.error_message)
            return

        if not self._guard.is_current(token):
            self._discard(token, "stale_result")
            return
        self.items = envelope.items
        self.meta = envelope.meta
        self.error_message = None
        self.state = ListState.LOADED
        log_action(logger, self.module, "load", "success", seq=token.seq, total=envelope.meta.total)

    def _discard(self, token: RequestToken, reason: str) -> None:
        log_action(logger, self.module, "load", "discarded", level=logging.DEBUG, seq=token.seq, reason=reason)
