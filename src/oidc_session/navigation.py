"""
Location, history and router collaborators used during bootstrap.
"""

from typing import Protocol, runtime_checkable
from urllib.parse import parse_qsl, urlsplit


@runtime_checkable
class Location(Protocol):
    """The current address plus history replacement."""

    @property
    def href(self) -> str: ...

    def replace_state(self, url: str) -> None: ...


@runtime_checkable
class Router(Protocol):
    """Application router; only ``replace`` and ``push`` are used."""

    async def replace(self, path: str) -> None: ...

    async def push(self, path: str) -> None: ...


class MemoryLocation:
    """In-process location for hosts without a browser address bar."""

    def __init__(self, href: str = "/"):
        self._href = href
        self.entries: list[str] = [href]

    @property
    def href(self) -> str:
        return self._href

    def replace_state(self, url: str) -> None:
        self._href = url
        self.entries[-1] = url

    def push_state(self, url: str) -> None:
        self._href = url
        self.entries.append(url)


def strip_query(url: str) -> str:
    """
    Return the bare path of ``url`` (no query, no fragment).

    The current path is kept: ``/signin?code=..`` becomes ``/signin``, not
    ``/``. Hosts that want the address bar reset to the root should route
    there themselves (the router is sent to the target or ``/`` anyway).
    """
    return urlsplit(url).path or "/"


def is_callback_url(url: str) -> bool:
    """
    Heuristic check for an identity provider redirect callback.

    True when the query carries ``state`` and either ``code`` or ``error``.
    """
    names = {name for name, _ in parse_qsl(urlsplit(url).query, keep_blank_values=True)}
    return "state" in names and ("code" in names or "error" in names)
