"""
Contract for the identity client the session delegates to.

The client does all protocol work (redirects, token exchange, renewal,
storage) and reports background activity through ``IdentityEvents``.
Concrete clients subclass ``IdentityClient``; the session only ever sees
this interface.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable

from oidc_session.config import ClientSettings
from oidc_session.logger import get_logger
from oidc_session.models import SessionStatus, User

logger = get_logger(__name__)

Listener = Callable[..., Any]
ClientArgs = Mapping[str, Any] | None


class IdentityEvent(str, Enum):
    USER_LOADED = "user_loaded"
    USER_UNLOADED = "user_unloaded"
    SILENT_RENEW_ERROR = "silent_renew_error"
    ACCESS_TOKEN_EXPIRED = "access_token_expired"
    ACCESS_TOKEN_EXPIRING = "access_token_expiring"
    USER_SIGNED_IN = "user_signed_in"
    USER_SIGNED_OUT = "user_signed_out"
    USER_SESSION_CHANGED = "user_session_changed"


class IdentityEvents:
    """Listener registry for identity client events."""

    def __init__(self):
        self._listeners: dict[IdentityEvent, list[Listener]] = {}

    def add_listener(
        self, event: IdentityEvent, callback: Listener
    ) -> Callable[[], None]:
        """
        Subscribe to an event.

        Returns:
            A function that removes this subscription.
        """
        self._listeners.setdefault(event, []).append(callback)
        return lambda: self.remove_listener(event, callback)

    def remove_listener(self, event: IdentityEvent, callback: Listener) -> bool:
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)
            return True
        return False

    def listener_count(self, event: IdentityEvent) -> int:
        return len(self._listeners.get(event, []))

    def add_user_loaded(self, callback: Callable[[User], Any]):
        return self.add_listener(IdentityEvent.USER_LOADED, callback)

    def add_user_unloaded(self, callback: Callable[[], Any]):
        return self.add_listener(IdentityEvent.USER_UNLOADED, callback)

    def add_silent_renew_error(self, callback: Callable[[Exception], Any]):
        return self.add_listener(IdentityEvent.SILENT_RENEW_ERROR, callback)

    def add_access_token_expired(self, callback: Callable[[], Any]):
        return self.add_listener(IdentityEvent.ACCESS_TOKEN_EXPIRED, callback)

    async def raise_event(self, event: IdentityEvent, *args: Any) -> None:
        """Call every listener of ``event`` in registration order."""
        listeners = list(self._listeners.get(event, []))
        logger.debug(f"Raising {event.value} to {len(listeners)} listener(s)")
        for callback in listeners:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result


class IdentityClient(ABC):
    """
    Abstract OpenID Connect client.

    Every operation is a coroutine and may suspend. Failures are raised as
    whatever exception the implementation uses; callers pass them on as-is.
    """

    def __init__(self, settings: ClientSettings):
        self.settings = settings
        self.events = IdentityEvents()

    @abstractmethod
    async def signin_callback(self, url: str) -> User | None:
        """Complete a redirect callback. Raises on malformed/invalid callbacks."""

    @abstractmethod
    async def get_user(self) -> User | None:
        """Return the cached user, if any."""

    @abstractmethod
    async def signin_silent(self, args: ClientArgs = None) -> User | None:
        """Renew without user interaction. Raises when renewal fails."""

    @abstractmethod
    async def signin_popup(self, args: ClientArgs = None) -> User:
        pass

    @abstractmethod
    async def signin_redirect(self, args: ClientArgs = None) -> None:
        pass

    @abstractmethod
    async def signout_popup(self, args: ClientArgs = None) -> None:
        pass

    @abstractmethod
    async def signout_redirect(self, args: ClientArgs = None) -> None:
        pass

    @abstractmethod
    async def signout_silent(self, args: ClientArgs = None) -> None:
        pass

    @abstractmethod
    async def clear_stale_state(self) -> None:
        pass

    @abstractmethod
    async def query_session_status(self) -> SessionStatus | None:
        pass

    @abstractmethod
    async def revoke_tokens(self) -> None:
        pass

    @abstractmethod
    async def start_silent_renew(self) -> None:
        pass

    @abstractmethod
    async def stop_silent_renew(self) -> None:
        pass


ClientFactory = Callable[[ClientSettings], IdentityClient]
