from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar

V = TypeVar("V")


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def loop_scheduler(delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay_seconds, callback)


class DebouncedValue(Generic[V]):
    """Raw input value plus a committed copy that trails it by ``quiet_ms``.

    ``value`` changes on every ``set``; ``committed`` changes only once the
    raw value has been stable for the whole quiet period.
    """

    def __init__(
        self,
        initial: V,
        quiet_ms: int = 350,
        on_commit: Callable[[V], None] | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.value: V = initial
        self.committed: V = initial
        self.quiet_ms = max(0, quiet_ms)
        self._on_commit = on_commit
        self._scheduler = scheduler or loop_scheduler
        self._pending: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def set(self, value: V) -> None:
        self.value = value
        self.cancel()
        if self.quiet_ms == 0:
            self._commit()
            return
        self._pending = self._scheduler(self.quiet_ms / 1000, self._commit)

    def flush(self) -> None:
        """Commit the raw value now if a commit is pending."""
        if self._pending is not None:
            self.cancel()
            self._commit()

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def reset(self, value: V) -> None:
        self.cancel()
        self.value = value
        self.committed = value

    def _commit(self) -> None:
        self._pending = None
        if self.value == self.committed:
            return
        self.committed = self.value
        if self._on_commit is not None:
            self._on_commit(self.committed)
