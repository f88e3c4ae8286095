"""
Pydantic models for values handed over by the identity client.

The session layer only looks at ``User.expired`` and ``User.state``; every
other field is carried through for the hosting application.
"""

import time
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """An authenticated principal as returned by the identity client."""

    model_config = ConfigDict(frozen=True)

    id_token: str | None = None
    session_state: str | None = None
    access_token: str = ""
    refresh_token: str | None = None
    token_type: str = "Bearer"
    scope: str | None = None
    profile: dict[str, Any] = Field(default_factory=dict)
    expires_at: int | None = None  # epoch seconds
    state: Any = None  # app-defined, e.g. {"to": "/dashboard"}

    @property
    def expires_in(self) -> int | None:
        """Seconds until the access token expires, or None if unknown."""
        if self.expires_at is None:
            return None
        return self.expires_at - int(time.time())

    @property
    def expired(self) -> bool:
        expires_in = self.expires_in
        return expires_in is not None and expires_in <= 0

    @property
    def scopes(self) -> list[str]:
        return (self.scope or "").split()


class SessionStatus(BaseModel):
    """Result of a check-session query against the provider."""

    session_state: str
    sub: str | None = None
    sid: str | None = None


def navigation_target(user: User | None) -> str | None:
    """
    Extract the post-login navigation target carried in ``user.state``.

    Returns:
        The ``to`` path when state is a mapping holding a non-empty string,
        otherwise None.
    """
    if user is None or not isinstance(user.state, Mapping):
        return None
    target = user.state.get("to")
    if isinstance(target, str) and target:
        return target
    return None
