"""
Reactive session state.

``Ref`` is a small observable cell; ``SessionState`` groups the four refs the
hosting application watches. There is no locking: every field is
last-writer-wins across the reconciler, the command proxy and the event
bridge.
"""

from typing import Any, Callable, Generic, TypeVar

from oidc_session.logger import get_logger
from oidc_session.models import User

logger = get_logger(__name__)

T = TypeVar("T")


class Ref(Generic[T]):
    """An observable value. Watchers get ``(new, old)`` on every change."""

    def __init__(self, value: T):
        self._value = value
        self._watchers: list[Callable[[T, T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new: T) -> None:
        old = self._value
        self._value = new
        if new is old:
            return
        for watcher in list(self._watchers):
            try:
                watcher(new, old)
            except Exception as e:
                logger.error(f"Watcher {watcher!r} raised: {e}")

    def watch(self, callback: Callable[[T, T], None]) -> Callable[[], None]:
        """
        Register a change callback.

        Returns:
            A function that removes the callback again.
        """
        self._watchers.append(callback)

        def unwatch() -> None:
            if callback in self._watchers:
                self._watchers.remove(callback)

        return unwatch

    def readonly(self) -> "ReadonlyRef[T]":
        return ReadonlyRef(self)

    def __repr__(self) -> str:
        return f"Ref({self._value!r})"


class ReadonlyRef(Generic[T]):
    """Read-only view over a ``Ref``."""

    def __init__(self, ref: Ref[T]):
        self._ref = ref

    @property
    def value(self) -> T:
        return self._ref.value

    def watch(self, callback: Callable[[T, T], None]) -> Callable[[], None]:
        return self._ref.watch(callback)

    def __repr__(self) -> str:
        return f"ReadonlyRef({self._ref.value!r})"


class SessionState:
    """Shared authentication state: loading, authenticated, user, error."""

    def __init__(self):
        self.loading: Ref[bool] = Ref(True)
        self.authenticated: Ref[bool] = Ref(False)
        self.user: Ref[User | None] = Ref(None)
        self.error: Ref[Exception | None] = Ref(None)

    def apply(self, user: User | None) -> None:
        """Adopt ``user`` as the current principal and end loading."""
        self.authenticated.value = user is not None and not user.expired
        self.user.value = user
        self.loading.value = False

    def begin(self) -> None:
        self.loading.value = True

    def succeed(self) -> None:
        self.loading.value = False
        self.error.value = None

    def fail(self, error: Exception) -> None:
        self.loading.value = False
        self.error.value = error

    def record_error(self, error: Exception) -> None:
        """Set ``error`` without touching any other field."""
        self.error.value = error

    def snapshot(self) -> dict[str, Any]:
        """Serializable view of the current values."""
        user = self.user.value
        error = self.error.value
        return {
            "loading": self.loading.value,
            "authenticated": self.authenticated.value,
            "user": user.model_dump(mode="json") if user is not None else None,
            "error": str(error) if error is not None else None,
        }
