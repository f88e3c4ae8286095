"""
oidc_session: session lifecycle controller for OpenID Connect clients.

- state: reactive SessionState (loading, authenticated, user, error)
- reconciler: one-shot bootstrap from the current address
- proxy: loading/error bookkeeping around sign-in/sign-out commands
- events: identity client events mirrored into SessionState
- controller: OidcSession and the process-wide installed handle
"""

from oidc_session.client import IdentityClient, IdentityEvent, IdentityEvents
from oidc_session.config import ClientSettings, PluginSettings
from oidc_session.controller import (
    NOT_INSTALLED,
    NotInstalledSession,
    OidcSession,
    SessionCommands,
    current_session,
    reset_current_session,
    use_oidc_auth,
)
from oidc_session.exceptions import (
    ConfigurationError,
    NotInstalledError,
    OidcSessionError,
)
from oidc_session.models import SessionStatus, User, navigation_target
from oidc_session.navigation import MemoryLocation, is_callback_url, strip_query
from oidc_session.state import ReadonlyRef, Ref, SessionState

__all__ = [
    "IdentityClient",
    "IdentityEvent",
    "IdentityEvents",
    "ClientSettings",
    "PluginSettings",
    "NOT_INSTALLED",
    "NotInstalledSession",
    "OidcSession",
    "SessionCommands",
    "current_session",
    "reset_current_session",
    "use_oidc_auth",
    "ConfigurationError",
    "NotInstalledError",
    "OidcSessionError",
    "SessionStatus",
    "User",
    "navigation_target",
    "MemoryLocation",
    "is_callback_url",
    "strip_query",
    "ReadonlyRef",
    "Ref",
    "SessionState",
]
