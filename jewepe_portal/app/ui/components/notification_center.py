from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class ToastKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Toast:
    kind: ToastKind
    message: str


@dataclass
class NotificationCenter:
    """Keeps the toasts raised by controllers and forms.

    Listeners receive every toast as it is pushed; the CLI prints them and
    tests read ``history``.
    """

    max_items: int = 50
    history: list[Toast] = field(default_factory=list)
    _listeners: list[Callable[[Toast], None]] = field(default_factory=list)

    def subscribe(self, listener: Callable[[Toast], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def push(self, kind: ToastKind, message: str) -> Toast:
        toast = Toast(kind=kind, message=message)
        self.history.append(toast)
        if len(self.history) > self.max_items:
            del self.history[: len(self.history) - self.max_items]
        for listener in list(self._listeners):
            listener(toast)
        return toast

    def success(self, message: str) -> Toast:
        return self.push(ToastKind.SUCCESS, message)

    def error(self, message: str) -> Toast:
        return self.push(ToastKind.ERROR, message)

    def warning(self, message: str) -> Toast:
        return self.push(ToastKind.WARNING, message)

    def info(self, message: str) -> Toast:
        return self.push(ToastKind.INFO, message)

    def last(self) -> Toast | None:
        return self.history[-1] if self.history else None

    def clear(self) -> None:
        self.history.clear()
