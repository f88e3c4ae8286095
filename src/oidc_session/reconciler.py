"""
Bootstrap reconciliation, run once when the session is installed.

Decides whether the current address is a provider callback or a plain page
load and brings ``SessionState`` in line with what the identity client
holds:

- callback: complete it, clean the address bar, route to the target carried
  in ``user.state`` (or ``/``), then apply the user;
- page load: apply the cached user, or a silently renewed one when silent
  renewal is configured;
- any failure: clean the address bar and route to ``/``. Failures stop
  here; they are logged but never raised or stored in ``error``.
"""

from oidc_session.client import IdentityClient
from oidc_session.config import ClientSettings
from oidc_session.logger import get_logger
from oidc_session.models import navigation_target
from oidc_session.navigation import Location, Router, is_callback_url, strip_query
from oidc_session.state import SessionState

logger = get_logger(__name__)

ROOT_PATH = "/"


class Reconciler:
    """Single-shot bootstrap of the session state."""

    def __init__(
        self,
        client: IdentityClient,
        state: SessionState,
        settings: ClientSettings,
        location: Location,
        router: Router | None = None,
    ):
        self.client = client
        self.state = state
        self.settings = settings
        self.location = location
        self.router = router
        self._started = False

    async def reconcile(self) -> None:
        if self._started:
            raise RuntimeError("Session bootstrap already ran")
        self._started = True

        href = self.location.href
        try:
            if is_callback_url(href):
                await self._resume_callback(href)
            else:
                await self._resume_session()
        except Exception as e:
            # Covers callback, cached-user and silent-renew failures alike
            logger.warning(f"Session bootstrap failed, returning to root: {e!r}")
            self.location.replace_state(strip_query(href))
            if self.router is not None:
                try:
                    await self.router.push(ROOT_PATH)
                except Exception as nav_error:
                    logger.error(f"Navigation to root failed: {nav_error!r}")

    async def _resume_callback(self, href: str) -> None:
        logger.info("Provider callback detected, completing sign-in")
        user = await self.client.signin_callback(href)
        target = navigation_target(user)

        self.location.replace_state(strip_query(href))
        if self.router is not None:
            await self.router.replace(target or ROOT_PATH)

        if user is not None:
            self.state.apply(user)

    async def _resume_session(self) -> None:
        user = await self.client.get_user()
        logger.debug(f"Cached user present: {user is not None}")

        if not self.settings.silent_renew_enabled:
            self.state.apply(user)
            return

        try:
            refreshed = await self.client.signin_silent()
        except Exception:
            self.state.apply(user)
            raise
        self.state.apply(refreshed)
