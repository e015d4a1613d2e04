from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, RedirectResponse

from songqueue.config import FRONTEND_URL, SPOTIFY_CLIENT_ID, SPOTIFY_REDIRECT_URI
from songqueue.core import (
    IdentityKind,
    InvalidCode,
    SongQueueError,
    log_error,
    log_info,
    log_warning,
    mask_token,
)
from songqueue.data import Session, SessionStore
from songqueue.identity import AccessGate
from songqueue.spotify import build_spotify_auth_url, exchange_code_for_token

from ..deps import get_access_gate, get_current_session, get_session_store
from ..errors import raise_http_error
from .schemas import AdminInfo, SessionResponse, TeamInfo, VerifyRequest, VerifyResponse

router = APIRouter()


def _frontend_redirect(**params: str) -> RedirectResponse:
    separator = "&" if "?" in FRONTEND_URL else "?"
    return RedirectResponse(f"{FRONTEND_URL}{separator}{urlencode(params)}")


# --- Spotify OAuth ---------------------------------------------------------


@router.get("/auth")
def get_auth_url() -> dict:
    """
    Return the Spotify authorization URL the UI should send the user to.
    """
    if not SPOTIFY_CLIENT_ID or not SPOTIFY_REDIRECT_URI:
        raise HTTPException(
            status_code=500,
            detail={"status": "misconfigured", "message": "Spotify env vars not configured"},
        )
    return {"url": build_spotify_auth_url()}


@router.get("/callback")
def auth_callback(
    code: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    error: Optional[str] = Query(default=None),
) -> RedirectResponse:
    """
    Spotify redirect target: exchange the code, then send the browser back to
    the UI with the access token in the query string.
    """
    if error:
        log_warning(f"Spotify authorization denied: {error}")
        return _frontend_redirect(error="auth_failed")

    if not code or not state:
        log_warning("Missing code or state in Spotify callback.")
        return _frontend_redirect(error="missing_params")

    try:
        token_info = exchange_code_for_token(code)
    except SongQueueError as e:
        log_error(f"Token exchange failed: {e}")
        return _frontend_redirect(error="token_exchange_failed")

    access_token = token_info["access_token"]
    log_info(f"Spotify access token issued ({mask_token(access_token)}).")
    return _frontend_redirect(access_token=access_token)


# --- Team / admin login ----------------------------------------------------


@router.post("/auth/verify", response_model=VerifyResponse)
def verify_code(
    body: VerifyRequest,
    gate: AccessGate = Depends(get_access_gate),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Log in with a team code or an admin code.

    On success a session token is returned; send it back in the
    X-Session-Token header on every queue or playback call.
    """
    try:
        identity = gate.verify(body.code or "")
    except InvalidCode as e:
        return JSONResponse(status_code=401, content={"success": False, "error": str(e)})
    except SongQueueError as e:
        raise_http_error(e)

    sessions.purge_expired()
    session = sessions.create(identity)

    return VerifyResponse(
        team=TeamInfo(team_name=identity.name) if identity.kind == IdentityKind.TEAM else None,
        admin=AdminInfo(name=identity.name) if identity.kind == IdentityKind.ADMIN else None,
        session_token=session.token,
        capabilities=sorted(c.value for c in identity.capabilities),
    )


@router.get("/auth/session", response_model=SessionResponse)
def get_session(session: Session = Depends(get_current_session)) -> SessionResponse:
    identity = session.identity
    return SessionResponse(
        kind=identity.kind.value,
        name=identity.name,
        is_admin=identity.is_admin,
        capabilities=sorted(c.value for c in identity.capabilities),
    )


@router.post("/auth/logout")
def logout(
    session: Session = Depends(get_current_session),
    sessions: SessionStore = Depends(get_session_store),
) -> dict:
    sessions.revoke(session.token)
    log_info(f"{session.identity.name} logged out.")
    return {"success": True}
