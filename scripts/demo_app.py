"""
Demo host wiring an OidcSession into a Starlette app.

Uses an in-memory identity client so the wiring can be tried without a
provider; swap ``DemoIdentityClient`` for a real client factory.

Usage:
    uvicorn demo_app:app --app-dir scripts --port 5174
"""

import time
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from oidc_session import (
    ClientSettings,
    IdentityClient,
    IdentityEvent,
    OidcSession,
    PluginSettings,
    SessionStatus,
    User,
    use_oidc_auth,
)
from oidc_session.routes import create_routes

SETTINGS = ClientSettings(
    authority="https://demo.duendesoftware.com/",
    client_id="interactive.public",
    redirect_uri="http://localhost:5174/signin",
    silent_redirect_uri="http://localhost:5174/signinsilent",
    automatic_silent_renew=True,
)


class DemoIdentityClient(IdentityClient):
    """Signs in a fixed demo user locally; no network involved."""

    def __init__(self, settings: ClientSettings):
        super().__init__(settings)
        self._user: User | None = None

    def _demo_user(self) -> User:
        return User(
            access_token="demo-access-token",
            scope=self.settings.scope,
            profile={"sub": "demo", "name": "Demo User"},
            expires_at=int(time.time()) + 3600,
        )

    async def _load(self, user: User | None) -> User | None:
        self._user = user
        if user is None:
            await self.events.raise_event(IdentityEvent.USER_UNLOADED)
        else:
            await self.events.raise_event(IdentityEvent.USER_LOADED, user)
        return user

    async def signin_callback(self, url):
        return await self._load(self._demo_user())

    async def get_user(self):
        return self._user

    async def signin_silent(self, args=None):
        if self._user is None:
            raise RuntimeError("login_required")
        return await self._load(self._demo_user())

    async def signin_popup(self, args=None):
        return await self._load(self._demo_user())

    async def signin_redirect(self, args=None):
        await self._load(self._demo_user())

    async def signout_popup(self, args=None):
        await self._load(None)

    async def signout_redirect(self, args=None):
        await self._load(None)

    async def signout_silent(self, args=None):
        await self._load(None)

    async def clear_stale_state(self):
        pass

    async def query_session_status(self):
        if self._user is None:
            return None
        return SessionStatus(session_state="demo", sub="demo")

    async def revoke_tokens(self):
        pass

    async def start_silent_renew(self):
        pass

    async def stop_silent_renew(self):
        pass


async def signin(request: Request) -> JSONResponse:
    session = use_oidc_auth(request)
    await session.signin_popup()
    return JSONResponse(session.snapshot())


async def signout(request: Request) -> JSONResponse:
    session = use_oidc_auth(request)
    await session.signout_popup()
    return JSONResponse(session.snapshot())


@asynccontextmanager
async def lifespan(app: Starlette):
    session = OidcSession(
        SETTINGS, DemoIdentityClient, PluginSettings(log_level="DEBUG")
    )
    session.install(app)
    await session.ready()
    yield
    session.uninstall()


app = Starlette(
    routes=[
        *create_routes(),
        Route("/auth/signin", signin, methods=["POST"]),
        Route("/auth/signout", signout, methods=["POST"]),
    ],
    lifespan=lifespan,
)
