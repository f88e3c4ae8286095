"""
Session controller and the process-wide installed handle.

``OidcSession`` ties the pieces together: on ``install`` it builds the
identity client, attaches the event bridge and schedules the bootstrap
reconciler. Afterwards every sign-in/sign-out command goes through the
command proxy.

Until some session is installed, ``current_session()`` returns the
``NOT_INSTALLED`` sentinel, whose commands only log a configuration error.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from oidc_session.client import ClientArgs, ClientFactory, IdentityClient
from oidc_session.config import ClientSettings, PluginSettings
from oidc_session.events import EventBridge
from oidc_session.exceptions import NotInstalledError
from oidc_session.logger import get_logger, setup_logging
from oidc_session.models import SessionStatus, User
from oidc_session.navigation import Location, MemoryLocation, Router
from oidc_session.proxy import CommandProxy
from oidc_session.reconciler import Reconciler
from oidc_session.state import ReadonlyRef, Ref, SessionState

logger = get_logger(__name__)

# Attribute name on ``app.state`` under which an installed session is published
AUTH_STATE_KEY = "oidc"

Command = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class SessionCommands:
    """The command surface as free-standing callables."""

    signin_popup: Command
    signin_silent: Command
    signin_redirect: Command
    signout_popup: Command
    signout_redirect: Command
    signout_silent: Command
    clear_stale_state: Command
    query_session_status: Command
    revoke_tokens: Command
    start_silent_renew: Command
    stop_silent_renew: Command


def _build_commands(handle: Any) -> SessionCommands:
    return SessionCommands(
        signin_popup=handle.signin_popup,
        signin_silent=handle.signin_silent,
        signin_redirect=handle.signin_redirect,
        signout_popup=handle.signout_popup,
        signout_redirect=handle.signout_redirect,
        signout_silent=handle.signout_silent,
        clear_stale_state=handle.clear_stale_state,
        query_session_status=handle.query_session_status,
        revoke_tokens=handle.revoke_tokens,
        start_silent_renew=handle.start_silent_renew,
        stop_silent_renew=handle.stop_silent_renew,
    )


class OidcSession:
    """
    Authentication session for a hosting application.

    Args:
        settings: Identity client settings, handed to ``client_factory``.
        client_factory: Builds the ``IdentityClient`` at install time.
        plugin_settings: Optional logging configuration.
    """

    def __init__(
        self,
        settings: ClientSettings,
        client_factory: ClientFactory,
        plugin_settings: PluginSettings | None = None,
    ):
        self.settings = settings
        self.plugin_settings = plugin_settings or PluginSettings()
        self._client_factory = client_factory
        self._client: IdentityClient | None = None
        self._bridge: EventBridge | None = None
        self._bootstrap: asyncio.Task | None = None
        self._app: Any = None

        self._state = SessionState()
        self._proxy = CommandProxy(self._state)

        self.is_loading: ReadonlyRef[bool] = self._state.loading.readonly()
        self.is_authenticated: ReadonlyRef[bool] = self._state.authenticated.readonly()
        self.user: ReadonlyRef[User | None] = self._state.user.readonly()
        self.error: ReadonlyRef[Exception | None] = self._state.error.readonly()

        self.commands = _build_commands(self)

    @property
    def installed(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> IdentityClient:
        if self._client is None:
            raise NotInstalledError("OidcSession.install() has not been called")
        return self._client

    def install(
        self,
        app: Any = None,
        *,
        router: Router | None = None,
        location: Location | None = None,
    ) -> asyncio.Task:
        """
        Install the session and schedule the bootstrap.

        Must be called from inside a running event loop.

        Args:
            app: Optional host application with a ``state`` namespace
                (e.g. Starlette). The session is published as
                ``app.state.oidc`` and ``app.state.router`` is used when no
                router is given.
            router: Router used for post-callback navigation.
            location: Current address. Defaults to a ``MemoryLocation`` at ``/``.

        Returns:
            The bootstrap task.

        Raises:
            RuntimeError: If already installed or no event loop is running.
        """
        if self._client is not None:
            raise RuntimeError("OidcSession is already installed")
        loop = asyncio.get_running_loop()

        if self.plugin_settings.log_level:
            setup_logging(
                level=self.plugin_settings.log_level, sink=self.plugin_settings.log_sink
            )

        self._client = self._client_factory(self.settings)
        self._bridge = EventBridge(self._client, self._state)
        self._bridge.attach()

        if router is None and app is not None:
            router = getattr(app.state, "router", None)
        reconciler = Reconciler(
            self._client,
            self._state,
            self.settings,
            location or MemoryLocation(),
            router,
        )
        self._bootstrap = loop.create_task(self._proxy(reconciler.reconcile))

        if app is not None:
            setattr(app.state, AUTH_STATE_KEY, self)
            self._app = app
        _set_current_session(self)

        logger.info(
            f"OIDC session installed (authority={self.settings.authority}, "
            f"client_id={self.settings.client_id}, "
            f"silent_renew={self.settings.silent_renew_enabled})"
        )
        return self._bootstrap

    def uninstall(self) -> None:
        """Detach from the client and withdraw the published handle."""
        if self._bridge is not None:
            self._bridge.detach()
        if self._app is not None and getattr(self._app.state, AUTH_STATE_KEY, None) is self:
            delattr(self._app.state, AUTH_STATE_KEY)
        if current_session() is self:
            reset_current_session()
        self._client = None
        self._bridge = None
        self._app = None
        logger.info("OIDC session uninstalled")

    async def ready(self) -> None:
        """Wait until the bootstrap has finished."""
        if self._bootstrap is None:
            raise NotInstalledError("OidcSession.install() has not been called")
        await self._bootstrap

    def snapshot(self) -> dict[str, Any]:
        return self._state.snapshot()

    # -- Proxied commands ----------------------------------------------------

    async def signin_popup(self, args: ClientArgs = None) -> User:
        client = self.client
        return await self._proxy(lambda: client.signin_popup(args))

    async def signin_silent(self, args: ClientArgs = None) -> User | None:
        client = self.client
        return await self._proxy(lambda: client.signin_silent(args))

    async def signin_redirect(self, args: ClientArgs = None) -> None:
        client = self.client
        return await self._proxy(lambda: client.signin_redirect(args))

    async def signout_popup(self, args: ClientArgs = None) -> None:
        client = self.client
        return await self._proxy(lambda: client.signout_popup(args))

    async def signout_redirect(self, args: ClientArgs = None) -> None:
        client = self.client
        return await self._proxy(lambda: client.signout_redirect(args))

    async def signout_silent(self, args: ClientArgs = None) -> None:
        client = self.client
        return await self._proxy(lambda: client.signout_silent(args))

    # -- Direct commands -----------------------------------------------------

    async def clear_stale_state(self) -> None:
        return await self.client.clear_stale_state()

    async def query_session_status(self) -> SessionStatus | None:
        return await self.client.query_session_status()

    async def revoke_tokens(self) -> None:
        return await self.client.revoke_tokens()

    async def start_silent_renew(self) -> None:
        return await self.client.start_silent_renew()

    async def stop_silent_renew(self) -> None:
        return await self.client.stop_silent_renew()


class _Resolved:
    """Awaitable that completes immediately with None."""

    def __await__(self):
        return None
        yield


def _not_installed(name: str):
    def handler(self, *args: Any, **kwargs: Any) -> _Resolved:
        logger.error(
            f"OIDC session plugin is not installed; '{name}' ignored. "
            "Call OidcSession.install() first."
        )
        return _Resolved()

    handler.__name__ = name
    return handler


class NotInstalledSession:
    """Stand-in used before any ``OidcSession`` is installed."""

    installed = False

    signin_popup = _not_installed("signin_popup")
    signin_silent = _not_installed("signin_silent")
    signin_redirect = _not_installed("signin_redirect")
    signout_popup = _not_installed("signout_popup")
    signout_redirect = _not_installed("signout_redirect")
    signout_silent = _not_installed("signout_silent")
    clear_stale_state = _not_installed("clear_stale_state")
    query_session_status = _not_installed("query_session_status")
    revoke_tokens = _not_installed("revoke_tokens")
    start_silent_renew = _not_installed("start_silent_renew")
    stop_silent_renew = _not_installed("stop_silent_renew")

    def __init__(self):
        self.is_loading: ReadonlyRef[bool] = Ref(False).readonly()
        self.is_authenticated: ReadonlyRef[bool] = Ref(False).readonly()
        self.user: ReadonlyRef[User | None] = Ref(None).readonly()
        self.error: ReadonlyRef[Exception | None] = Ref(None).readonly()
        self.commands = _build_commands(self)

    def snapshot(self) -> dict[str, Any]:
        return {"loading": False, "authenticated": False, "user": None, "error": None}

    def __repr__(self) -> str:
        return "NOT_INSTALLED"


NOT_INSTALLED = NotInstalledSession()

SessionHandle = OidcSession | NotInstalledSession

_current_session: SessionHandle = NOT_INSTALLED


def current_session() -> SessionHandle:
    """Return the most recently installed session, or ``NOT_INSTALLED``."""
    return _current_session


def _set_current_session(session: SessionHandle) -> None:
    global _current_session
    _current_session = session


def reset_current_session() -> None:
    _set_current_session(NOT_INSTALLED)


def use_oidc_auth(request_or_app: Any | None = None) -> SessionHandle:
    """
    Look up the session for a request or app.

    With a Starlette request (or anything with ``.app``) or an app, returns
    the session published on ``app.state``. Without arguments, returns the
    process-wide current session. Falls back to ``NOT_INSTALLED``.
    """
    if request_or_app is None:
        return _current_session
    app = getattr(request_or_app, "app", request_or_app)
    app_state = getattr(app, "state", None)
    if app_state is None:
        return NOT_INSTALLED
    return getattr(app_state, AUTH_STATE_KEY, NOT_INSTALLED)
