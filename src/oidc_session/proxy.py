"""
Command proxy: uniform loading/error bookkeeping around client calls.
"""

import inspect
from typing import Any, Awaitable, Callable, TypeVar

from oidc_session.logger import get_logger
from oidc_session.state import SessionState

logger = get_logger(__name__)

T = TypeVar("T")


class CommandProxy:
    """
    Wraps an operation so that ``loading`` and ``error`` track it.

    Failures are recorded on the state and re-raised unchanged, so both
    state watchers and the awaiting caller see the same exception object.
    """

    def __init__(self, state: SessionState):
        self.state = state

    async def __call__(self, operation: Callable[[], Awaitable[T] | T]) -> T:
        self.state.begin()
        try:
            result: Any = operation()
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            self.state.fail(e)
            logger.warning(f"Session command failed: {e!r}")
            raise
        except BaseException:
            # Cancellation: settle loading, leave error alone
            self.state.loading.value = False
            raise
        self.state.succeed()
        return result
