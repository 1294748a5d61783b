from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, Union

from jewepe_portal.app.application.busy_registry import BusyRegistry
from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.listing.controller import ListController
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.clients.jewepe_sdk.errors import GENERIC_MESSAGE, ApiError

logger = get_logger(__name__)

NEW_ITEM_KEY = "__new__"
BUSY_MESSAGE = "Masih diproses, tunggu sebentar."


@dataclass(frozen=True)
class Create:
    payload: dict[str, Any]


@dataclass(frozen=True)
class Update:
    payload: dict[str, Any]


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class SetStatus:
    value: str


MutationOp = Union[Create, Update, Delete, SetStatus]


class MutationOutcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    REJECTED = "rejected"
    NOOP = "noop"


@dataclass(frozen=True)
class MutationMessages:
    create_success: str = "Data berhasil ditambahkan."
    create_error: str = GENERIC_MESSAGE
    update_success: str = "Data berhasil diperbarui."
    update_error: str = GENERIC_MESSAGE
    delete_success: str = "Data berhasil dihapus."
    delete_error: str = GENERIC_MESSAGE
    status_success: str = "Status berhasil diperbarui."
    status_error: str = GENERIC_MESSAGE
    busy: str = BUSY_MESSAGE

    def for_op(self, op: MutationOp) -> tuple[str, str]:
        if isinstance(op, Create):
            return self.create_success, self.create_error
        if isinstance(op, Update):
            return self.update_success, self.update_error
        if isinstance(op, Delete):
            return self.delete_success, self.delete_error
        return self.status_success, self.status_error


class MutableResource(Protocol):
    async def create(self, body: dict[str, Any]) -> dict[str, Any]: ...

    async def update(self, item_id: str, body: dict[str, Any]) -> dict[str, Any]: ...

    async def delete(self, item_id: str) -> dict[str, Any]: ...

    async def set_status(self, item_id: str, status: str) -> dict[str, Any]: ...


def _plain(value: Any) -> Any:
    return getattr(value, "value", value)


def target_key(target: Any) -> str:
    if target is None:
        return NEW_ITEM_KEY
    if isinstance(target, str):
        return target
    return str(target.id)


@dataclass
class MutationBridge:
    """Runs one single-item write and reloads the list when it succeeds.

    Writes are never retried and never aborted by list cancellation. A
    target that already has a write in flight is rejected with a warning.
    """

    client: MutableResource
    controller: ListController[Any] | None = None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    messages: MutationMessages = field(default_factory=MutationMessages)
    busy: BusyRegistry = field(default_factory=BusyRegistry)
    module: str = "mutation"
    last_message: str | None = None

    def is_busy(self, target: Any) -> bool:
        return self.busy.is_busy(target_key(target))

    def can_set_status(self, item: Any, value: str) -> bool:
        if self.is_busy(item):
            return False
        return _plain(getattr(item, "status", None)) != _plain(value)

    async def perform(self, op: MutationOp, target: Any = None) -> MutationOutcome:
        key = target_key(target)
        action = type(op).__name__.lower()

        if isinstance(op, SetStatus) and _plain(getattr(target, "status", None)) == _plain(op.value):
            log_action(logger, self.module, action, "noop", target=key, status=_plain(op.value))
            return MutationOutcome.NOOP

        if not self.busy.begin(key):
            log_action(logger, self.module, action, "rejected", target=key)
            self.last_message = self.messages.busy
            self.notifications.warning(self.messages.busy)
            return MutationOutcome.REJECTED

        success_message, error_message = self.messages.for_op(op)
        try:
            await self._dispatch(op, key)
        except ApiError as exc:
            log_action(logger, self.module, action, "error", trace_id=exc.trace_id, target=key, code=exc.code)
            self.last_message = ErrorMapper.to_display_message(exc, error_message)
            self.notifications.error(self.last_message)
            return MutationOutcome.FAILED
        else:
            log_action(logger, self.module, action, "success", target=key)
            self.last_message = success_message
            self.notifications.success(success_message)
            if self.controller is not None:
                self.controller.refresh()
            return MutationOutcome.SUCCESS
        finally:
            self.busy.end(key)

    async def _dispatch(self, op: MutationOp, key: str) -> dict[str, Any]:
        if isinstance(op, Create):
            return await self.client.create(op.payload)
        if isinstance(op, Update):
            return await self.client.update(key, op.payload)
        if isinstance(op, Delete):
            return await self.client.delete(key)
        if isinstance(op, SetStatus):
            return await self.client.set_status(key, _plain(op.value))
        raise TypeError(f"Unsupported mutation: {op!r}")
