from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.clients.jewepe_sdk.auth_store import AuthStore
from jewepe_portal.clients.jewepe_sdk.models import SessionData, SessionUser

if TYPE_CHECKING:
    from jewepe_portal.clients.jewepe_sdk.http_client import HttpClient

logger = get_logger(__name__)

ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class SessionEvent:
    kind: str
    user: SessionUser | None = None


SessionListener = Callable[[SessionEvent], None]


class SessionContext:
    """Process-wide holder of the bearer credential.

    Business components ask this object for the token; they never read the
    persisted store. Subscribers are notified on every login and logout.
    """

    def __init__(self, store: AuthStore | None = None) -> None:
        self._store = store
        self._token: str | None = None
        self._user: SessionUser | None = None
        self._listeners: list[SessionListener] = []

    @classmethod
    def restore(cls, store: AuthStore) -> "SessionContext":
        context = cls(store)
        data = store.load()
        if data is not None:
            context._token = data.access_token
            context._user = data.user
        return context

    @property
    def user(self) -> SessionUser | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.role == ADMIN_ROLE

    def get_token(self) -> str | None:
        return self._token

    def login(self, token: str, user: SessionUser | None) -> None:
        self._token = token
        self._user = user
        if self._store is not None:
            self._store.save(SessionData(access_token=token, user=user))
        log_action(logger, "session", "login", "success", user_id=user.id if user else None)
        self._notify(SessionEvent(kind="login", user=user))

    def logout(self) -> None:
        had_session = self._token is not None
        self._token = None
        self._user = None
        if self._store is not None:
            self._store.clear()
        if had_session:
            log_action(logger, "session", "logout", "success")
            self._notify(SessionEvent(kind="logout"))

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def bind(self, http_client: "HttpClient") -> None:
        """Attach this session to a transport: bearer on requests, logout on 401."""
        http_client.set_token_provider(self.get_token)
        http_client.register_auth_error_handler(lambda _error: self.logout())

    def _notify(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
