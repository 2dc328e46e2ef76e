# taskboard/auth/provider.py
"""
SessionProvider: wrapper around the external identity provider.

sign_in / sign_out are side-effecting only; callers learn the outcome from
``provider.stream``.
"""
from abc import ABC, abstractmethod
from typing import Optional

from taskboard.core.config import AuthSettings
from taskboard.core.exceptions import AuthError

from .identity import Identity, IdentitySnapshot, IdentityStream


class SessionProvider(ABC):
    """Abstract session provider interface."""

    def __init__(self, stream: Optional[IdentityStream] = None) -> None:
        # Until the provider reports, the identity is unknown
        self.stream = stream or IdentityStream(IdentitySnapshot(loading=True))

    @abstractmethod
    async def sign_in(self, provider_hint: str = "google") -> None:
        """Start the provider's sign-in flow (e.g. "google")."""
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session."""
        pass


class DevSessionProvider(SessionProvider):
    """Signs in one fixed identity. For local development and tests."""

    def __init__(self, identity: Identity, signed_in: bool = False) -> None:
        super().__init__(IdentityStream(IdentitySnapshot(user=identity if signed_in else None)))
        self.identity = identity

    @classmethod
    def from_settings(cls, auth: AuthSettings, signed_in: bool = False) -> "DevSessionProvider":
        return cls(Identity(uid=auth.dev_user_id, display_name=auth.dev_display_name), signed_in)

    async def sign_in(self, provider_hint: str = "google") -> None:
        self.stream.publish(IdentitySnapshot(loading=True))
        self.stream.publish(IdentitySnapshot(user=self.identity))

    async def sign_out(self) -> None:
        self.stream.publish(IdentitySnapshot())

    def fail(self, message: str) -> None:
        """Report a provider failure on the stream."""
        self.stream.publish(IdentitySnapshot(error=AuthError(message)))
