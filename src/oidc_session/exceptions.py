"""Exception types raised by oidc_session itself.

Errors coming from the identity client are never wrapped; they reach the
caller (and ``SessionState.error``) as the same object the client raised.
"""


class OidcSessionError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(OidcSessionError):
    """Settings are missing or invalid."""


class NotInstalledError(OidcSessionError):
    """A command was issued on a session that has not been installed yet."""
