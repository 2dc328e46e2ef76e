# taskboard/api/session.py
"""
Session routes.

Sign-in and sign-out hand the browser over to the identity provider (via
the authenticating proxy); the outcome shows up on the next GET /api/session.
"""
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query
from starlette.responses import RedirectResponse

from taskboard.auth.dependencies import get_optional_identity
from taskboard.auth.gate import SessionGate
from taskboard.auth.identity import Identity, IdentitySnapshot, IdentityStream
from taskboard.core.config import settings
from taskboard.core.logging import log

router = APIRouter(prefix="/api/session", tags=["Session"])


def _redirect(base_url: str, next_url: str, **extra: str) -> RedirectResponse:
    separator = "&" if "?" in base_url else "?"
    query = urlencode({"rd": next_url, **extra})
    return RedirectResponse(f"{base_url}{separator}{query}", status_code=302)


@router.get("")
async def get_session(identity: Optional[Identity] = Depends(get_optional_identity)):
    """What the session gate shows for this request's identity."""
    stream = IdentityStream(IdentitySnapshot(user=identity))
    with SessionGate(stream, provider_hint=settings.auth.provider_hint) as gate:
        payload = gate.render().to_dict()
    payload["signInUrl"] = str(router.url_path_for("sign_in"))
    payload["signOutUrl"] = str(router.url_path_for("sign_out"))
    return payload


@router.get("/sign-in", name="sign_in")
async def sign_in(
    provider: Optional[str] = Query(None, description="Identity provider hint"),
    next_url: str = Query("/", alias="next"),
):
    log("AUTH", f"Sign-in requested via {provider or settings.auth.provider_hint}")
    # Without an explicit provider the proxy uses its configured default
    extra = {"provider": provider} if provider else {}
    return _redirect(settings.auth.sign_in_url, next_url, **extra)


@router.get("/sign-out", name="sign_out")
async def sign_out(next_url: str = Query("/", alias="next")):
    log("AUTH", "Sign-out requested")
    return _redirect(settings.auth.sign_out_url, next_url)
