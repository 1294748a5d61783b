from __future__ import annotations

import itertools
from dataclasses import dataclass, field


@dataclass
class RequestToken:
    seq: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class CancellationGuard:
    """Issues one token per list fetch; only the newest one is current."""

    _counter: itertools.count = field(default_factory=lambda: itertools.count(1))
    _current: RequestToken | None = None

    @property
    def current(self) -> RequestToken | None:
        return self._current

    def begin(self) -> RequestToken:
        if self._current is not None:
            self._current.cancel()
        self._current = RequestToken(seq=next(self._counter))
        return self._current

    def is_current(self, token: RequestToken) -> bool:
        return token is self._current and not token.cancelled

    def cancel_all(self) -> None:
        if self._current is not None:
            self._current.cancel()
