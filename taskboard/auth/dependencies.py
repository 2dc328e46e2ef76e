# taskboard/auth/dependencies.py
"""
Request identity resolution for the HTTP API.

The identity provider's flow runs in an authenticating proxy in front of the
service; by the time a request arrives here the proxy has verified the user
and forwarded the identity in headers.
"""
from typing import Mapping, Optional

from fastapi import Request

from taskboard.core.config import AuthSettings, settings
from taskboard.core.exceptions import AuthError
from taskboard.core.logging import log

from .identity import Identity


def resolve_identity(headers: Mapping[str, str], auth: AuthSettings) -> Optional[Identity]:
    uid = (headers.get(auth.user_header) or "").strip()
    if uid:
        display_name = (headers.get(auth.name_header) or "").strip() or None
        return Identity(uid=uid, display_name=display_name)
    if auth.mode == "dev":
        return Identity(uid=auth.dev_user_id, display_name=auth.dev_display_name)
    return None


def get_optional_identity(request: Request) -> Optional[Identity]:
    return resolve_identity(request.headers, settings.auth)


def get_identity(request: Request) -> Identity:
    """FastAPI dependency: the signed-in user, or AuthError (401)."""
    identity = get_optional_identity(request)
    if identity is None:
        log("AUTH", f"Rejected unauthenticated request to {request.url.path}")
        raise AuthError("Not signed in")
    return identity
