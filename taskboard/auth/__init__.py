# taskboard/auth/__init__.py
"""
Session handling: identity stream, provider wrapper and session gate.
"""
from .identity import Identity, IdentitySnapshot, IdentityStream
from .provider import SessionProvider, DevSessionProvider
from .gate import GateState, GateView, SessionGate

__all__ = [
    "Identity",
    "IdentitySnapshot",
    "IdentityStream",
    "SessionProvider",
    "DevSessionProvider",
    "GateState",
    "GateView",
    "SessionGate",
]
