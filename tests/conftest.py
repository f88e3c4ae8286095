"""Shared pytest fixtures and fakes."""

import time

import pytest

from oidc_session.client import IdentityClient
from oidc_session.config import ClientSettings
from oidc_session.controller import reset_current_session
from oidc_session.models import SessionStatus, User


def make_user(expired: bool = False, state=None, **fields) -> User:
    """Build a user whose token is valid for an hour, or expired an hour ago."""
    offset = -3600 if expired else 3600
    return User(
        access_token=fields.pop("access_token", "access-token"),
        expires_at=int(time.time()) + offset,
        state=state,
        **fields,
    )


class FakeIdentityClient(IdentityClient):
    """Scriptable identity client that records every call."""

    def __init__(self, settings: ClientSettings):
        super().__init__(settings)
        self.calls: list[tuple] = []
        self.callback_user: User | None = None
        self.callback_error: Exception | None = None
        self.cached_user: User | None = None
        self.get_user_error: Exception | None = None
        self.silent_user: User | None = None
        self.silent_error: Exception | None = None
        self.popup_user: User | None = None
        self.command_error: Exception | None = None
        self.session_status: SessionStatus | None = None

    async def signin_callback(self, url):
        self.calls.append(("signin_callback", url))
        if self.callback_error:
            raise self.callback_error
        return self.callback_user

    async def get_user(self):
        self.calls.append(("get_user",))
        if self.get_user_error:
            raise self.get_user_error
        return self.cached_user

    async def signin_silent(self, args=None):
        self.calls.append(("signin_silent", args))
        if self.silent_error:
            raise self.silent_error
        return self.silent_user

    async def signin_popup(self, args=None):
        self.calls.append(("signin_popup", args))
        if self.command_error:
            raise self.command_error
        return self.popup_user

    async def signin_redirect(self, args=None):
        self.calls.append(("signin_redirect", args))
        if self.command_error:
            raise self.command_error

    async def signout_popup(self, args=None):
        self.calls.append(("signout_popup", args))
        if self.command_error:
            raise self.command_error

    async def signout_redirect(self, args=None):
        self.calls.append(("signout_redirect", args))
        if self.command_error:
            raise self.command_error

    async def signout_silent(self, args=None):
        self.calls.append(("signout_silent", args))
        if self.command_error:
            raise self.command_error

    async def clear_stale_state(self):
        self.calls.append(("clear_stale_state",))

    async def query_session_status(self):
        self.calls.append(("query_session_status",))
        return self.session_status

    async def revoke_tokens(self):
        self.calls.append(("revoke_tokens",))

    async def start_silent_renew(self):
        self.calls.append(("start_silent_renew",))

    async def stop_silent_renew(self):
        self.calls.append(("stop_silent_renew",))


class FakeRouter:
    """Router that records navigation calls."""

    def __init__(self, fail: bool = False):
        self.replaced: list[str] = []
        self.pushed: list[str] = []
        self._fail = fail

    async def replace(self, path):
        if self._fail:
            raise RuntimeError("navigation failed")
        self.replaced.append(path)

    async def push(self, path):
        if self._fail:
            raise RuntimeError("navigation failed")
        self.pushed.append(path)


@pytest.fixture
def settings():
    """Settings without silent renewal."""
    return ClientSettings(
        authority="https://idp.example.com/",
        client_id="interactive.public",
        redirect_uri="http://localhost:5174/signin",
        automatic_silent_renew=False,
    )


@pytest.fixture
def silent_settings():
    """Settings with automatic silent renewal fully configured."""
    return ClientSettings(
        authority="https://idp.example.com/",
        client_id="interactive.public",
        redirect_uri="http://localhost:5174/signin",
        silent_redirect_uri="http://localhost:5174/signinsilent",
        automatic_silent_renew=True,
    )


@pytest.fixture
def client(settings):
    return FakeIdentityClient(settings)


@pytest.fixture
def router():
    return FakeRouter()


@pytest.fixture(autouse=True)
def _reset_current_session():
    """Keep the process-wide session handle isolated between tests."""
    reset_current_session()
    yield
    reset_current_session()
