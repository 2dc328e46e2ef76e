# taskboard/auth/gate.py
"""
SessionGate: decides what the page shows for the current identity.

    loading          -> "Loading Authentication..."
    error            -> "Error: <message>"
    unauthenticated  -> sign-in affordance
    authenticated    -> welcome header, log-out affordance, children
"""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Set

from taskboard.core.exceptions import AuthError
from taskboard.core.logging import log

from .identity import Identity, IdentitySnapshot, IdentityStream
from .provider import SessionProvider

LOADING_MESSAGE = "Loading Authentication..."
SIGN_IN_PROMPT = "Please Login To Manage Your Tasks"
SIGN_OUT_LABEL = "Log Out"


class GateState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


@dataclass
class GateView:
    state: GateState
    message: Optional[str] = None
    user: Optional[Identity] = None
    action_label: Optional[str] = None
    body: Any = None

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "message": self.message,
            "user": (
                {"uid": self.user.uid, "displayName": self.user.display_name}
                if self.user else None
            ),
            "actionLabel": self.action_label,
        }


def sign_in_label(provider_hint: str) -> str:
    return f"Sign in with {provider_hint.title()}"


class SessionGate:
    """
    Subscribes to an identity stream once, on construction; close()
    unsubscribes. Usable as a context manager.
    """

    def __init__(
        self,
        stream: IdentityStream,
        provider: Optional[SessionProvider] = None,
        provider_hint: str = "google",
    ) -> None:
        self.provider = provider
        self.provider_hint = provider_hint
        self._snapshot = stream.current
        self._pending: Set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = stream.subscribe(self._on_identity)

    def __enter__(self) -> "SessionGate":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _on_identity(self, snapshot: IdentitySnapshot) -> None:
        previous = self.state
        self._snapshot = snapshot
        if self.state != previous:
            log("GATE", f"{previous.value} -> {self.state.value}")

    @property
    def state(self) -> GateState:
        snapshot = self._snapshot
        if snapshot.loading:
            return GateState.LOADING
        if snapshot.error is not None:
            return GateState.ERROR
        if snapshot.user is None:
            return GateState.UNAUTHENTICATED
        return GateState.AUTHENTICATED

    @property
    def user(self) -> Optional[Identity]:
        return self._snapshot.user if self.state == GateState.AUTHENTICATED else None

    def render(self, children: Optional[Callable[[Identity], Any]] = None) -> GateView:
        state = self.state
        if state == GateState.LOADING:
            return GateView(state, message=LOADING_MESSAGE)
        if state == GateState.ERROR:
            return GateView(state, message=f"Error: {self._snapshot.error.message}")
        if state == GateState.UNAUTHENTICATED:
            return GateView(state, message=SIGN_IN_PROMPT, action_label=sign_in_label(self.provider_hint))

        user = self._snapshot.user
        return GateView(
            state,
            message=f"Welcome, {user.name}",
            user=user,
            action_label=SIGN_OUT_LABEL,
            body=children(user) if children is not None else None,
        )

    # ------------------------------------------------------------------
    # Fire-and-forget actions
    # ------------------------------------------------------------------

    def sign_in(self) -> asyncio.Task:
        return self._fire(self._require_provider().sign_in(self.provider_hint), "sign-in")

    def sign_out(self) -> asyncio.Task:
        return self._fire(self._require_provider().sign_out(), "sign-out")

    def _require_provider(self) -> SessionProvider:
        if self.provider is None:
            raise AuthError("No session provider configured")
        return self.provider

    def _fire(self, coro, action: str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)

        def _done(finished: asyncio.Task) -> None:
            self._pending.discard(finished)
            if not finished.cancelled() and finished.exception() is not None:
                log("AUTH", f"❌ {action} failed: {finished.exception()}")

        task.add_done_callback(_done)
        return task

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
