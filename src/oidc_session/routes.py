"""
Starlette routes exposing the session state.

Provides:
- GET /auth/session: JSON snapshot of loading/authenticated/user/error
"""

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from oidc_session.controller import NotInstalledSession, use_oidc_auth
from oidc_session.logger import get_logger

logger = get_logger(__name__)


async def get_session_state(request: Request) -> JSONResponse:
    """Return the current session snapshot, or 503 if none is installed."""
    session = use_oidc_auth(request)
    if isinstance(session, NotInstalledSession):
        logger.warning("Session state requested but no OIDC session is installed")
        return JSONResponse(
            {"error": "OIDC session is not installed"}, status_code=503
        )
    return JSONResponse(session.snapshot())


def create_routes(path: str = "/auth/session") -> list[Route]:
    return [Route(path, get_session_state, methods=["GET"])]
