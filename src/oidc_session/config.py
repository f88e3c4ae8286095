"""
Settings for the identity client and for the session plugin itself.

``ClientSettings`` is handed to the client factory at install time;
``PluginSettings`` only controls logging.
"""

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from oidc_session.exceptions import ConfigurationError

TRUTHY = {"1", "true", "yes", "on"}


class ClientSettings(BaseModel):
    """Identity provider client configuration."""

    authority: str
    client_id: str
    redirect_uri: str
    silent_redirect_uri: str | None = None
    post_logout_redirect_uri: str | None = None
    scope: str = "openid"
    response_type: str = "code"
    automatic_silent_renew: bool = True
    # Passed through to the client factory untouched
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def silent_renew_enabled(self) -> bool:
        """Whether bootstrap should try a silent sign-in."""
        return self.automatic_silent_renew and self.silent_redirect_uri is not None

    @classmethod
    def from_env(
        cls, prefix: str = "OIDC_", env_file: str | None = None
    ) -> "ClientSettings":
        """
        Build settings from environment variables.

        A ``.env`` file is loaded first without overriding variables that are
        already set.

        Args:
            prefix: Variable name prefix, e.g. ``OIDC_`` for ``OIDC_AUTHORITY``.
            env_file: Explicit .env path. Searched for when omitted.

        Raises:
            ConfigurationError: If a required variable is missing.
        """
        load_dotenv(env_file, override=False)

        def _get(name: str, required: bool = False) -> str | None:
            value = os.getenv(f"{prefix}{name}")
            if required and not value:
                raise ConfigurationError(
                    f"Missing required environment variable {prefix}{name}"
                )
            return value or None

        values: dict[str, Any] = {
            "authority": _get("AUTHORITY", required=True),
            "client_id": _get("CLIENT_ID", required=True),
            "redirect_uri": _get("REDIRECT_URI", required=True),
            "silent_redirect_uri": _get("SILENT_REDIRECT_URI"),
            "post_logout_redirect_uri": _get("POST_LOGOUT_REDIRECT_URI"),
        }
        if scope := _get("SCOPE"):
            values["scope"] = scope
        if response_type := _get("RESPONSE_TYPE"):
            values["response_type"] = response_type
        if (renew := _get("AUTOMATIC_SILENT_RENEW")) is not None:
            values["automatic_silent_renew"] = renew.strip().lower() in TRUTHY

        return cls(**values)


class PluginSettings(BaseModel):
    """Logging options applied when the session is installed."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    log_level: str | None = None  # None leaves logging to the host
    log_sink: Any = None
