# taskboard/auth/identity.py
"""
Identity values and the observable identity stream.

The stream is the only channel through which sign-in / sign-out results
reach the rest of the application.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from taskboard.core.exceptions import AuthError
from taskboard.core.logging import log


@dataclass(frozen=True)
class Identity:
    """Opaque authenticated user as issued by the identity provider."""
    uid: str
    display_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.display_name or self.uid


@dataclass(frozen=True)
class IdentitySnapshot:
    """(user-or-absent, loading flag, error-or-absent)"""
    user: Optional[Identity] = None
    loading: bool = False
    error: Optional[AuthError] = None


Subscriber = Callable[[IdentitySnapshot], None]


class IdentityStream:
    """
    Latest-value observable.

    New subscribers receive the current snapshot immediately; publish()
    notifies subscribers in subscription order.
    """

    def __init__(self, initial: Optional[IdentitySnapshot] = None) -> None:
        self._current = initial or IdentitySnapshot()
        self._subscribers: List[Subscriber] = []

    @property
    def current(self) -> IdentitySnapshot:
        return self._current

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; returns a function that unsubscribes it."""
        self._subscribers.append(callback)
        callback(self._current)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, snapshot: IdentitySnapshot) -> None:
        self._current = snapshot
        log("AUTH", f"identity -> user={snapshot.user.uid if snapshot.user else None} "
                    f"loading={snapshot.loading} error={bool(snapshot.error)}")
        # Snapshot of the list: callbacks may unsubscribe while being notified
        for callback in list(self._subscribers):
            callback(snapshot)
