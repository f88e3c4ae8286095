"""
Event bridge from identity client events into session state.
"""

from typing import Any, Callable

from oidc_session.client import IdentityClient, IdentityEvent
from oidc_session.logger import get_logger
from oidc_session.models import User
from oidc_session.state import SessionState

logger = get_logger(__name__)


class EventBridge:
    """
    Fixed subscriptions that keep ``SessionState`` in step with the client.

    Each event kind maps to one handler; handlers run whenever the client
    raises the event, interleaved with any in-flight command.
    """

    def __init__(self, client: IdentityClient, state: SessionState):
        self.client = client
        self.state = state
        self.handlers: dict[IdentityEvent, Callable[..., Any]] = {
            IdentityEvent.USER_LOADED: self._on_user_loaded,
            IdentityEvent.USER_UNLOADED: self._on_user_unloaded,
            IdentityEvent.SILENT_RENEW_ERROR: self._on_silent_renew_error,
            IdentityEvent.ACCESS_TOKEN_EXPIRED: self._on_access_token_expired,
        }
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def attached(self) -> bool:
        return bool(self._unsubscribers)

    def attach(self) -> None:
        """Subscribe every handler on the client. No-op when attached."""
        if self._unsubscribers:
            return
        for event, handler in self.handlers.items():
            self._unsubscribers.append(self.client.events.add_listener(event, handler))
        logger.debug(f"Event bridge attached ({len(self.handlers)} events)")

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        logger.debug("Event bridge detached")

    async def dispatch(self, event: IdentityEvent, *args: Any) -> None:
        """Run the handler for ``event`` directly, bypassing the client."""
        result = self.handlers[event](*args)
        if result is not None:
            await result

    def _on_user_loaded(self, user: User) -> None:
        self.state.apply(user)

    def _on_user_unloaded(self) -> None:
        self.state.apply(None)

    def _on_silent_renew_error(self, error: Exception) -> None:
        logger.warning(f"Silent renew failed: {error!r}")
        self.state.record_error(error)

    async def _on_access_token_expired(self) -> None:
        logger.info("Access token expired, reloading user")
        self.state.apply(await self.client.get_user())
