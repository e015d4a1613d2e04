import secrets
from typing import Dict, Optional
from urllib.parse import urlencode

import requests

from songqueue.config import (
    HTTP_TIMEOUT_SECONDS,
    SCOPES,
    SPOTIFY_AUTH_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REDIRECT_URI,
    SPOTIFY_TOKEN_URL,
)
from songqueue.core import UpstreamUnavailable, log_step, log_success, log_warning


def build_spotify_auth_url(state: Optional[str] = None) -> str:
    """
    Build the Spotify authorize URL (authorization-code flow).

    A random `state` is generated when none is given. The state is echoed
    back to /callback but not checked against anything.
    """
    params = {
        "response_type": "code",
        "client_id": SPOTIFY_CLIENT_ID,
        "scope": " ".join(SCOPES),
        "redirect_uri": SPOTIFY_REDIRECT_URI,
        "state": state or secrets.token_urlsafe(8),
    }
    return f"{SPOTIFY_AUTH_URL}?{urlencode(params)}"


def exchange_code_for_token(code: str) -> Dict:
    """
    Exchange an authorization code for an access token.

    The token is handed to the caller as-is; it is never stored or
    refreshed here.
    """
    log_step("Exchanging Spotify authorization code for an access token...")
    token_data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": SPOTIFY_REDIRECT_URI,
        "client_id": SPOTIFY_CLIENT_ID,
        "client_secret": SPOTIFY_CLIENT_SECRET,
    }
    try:
        r = requests.post(SPOTIFY_TOKEN_URL, data=token_data, timeout=HTTP_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        raise UpstreamUnavailable(f"Token exchange failed: {e}") from e

    if r.status_code != 200:
        log_warning(f"Token exchange failed with HTTP {r.status_code}: {r.text}")
        raise UpstreamUnavailable(
            f"Token exchange failed: HTTP {r.status_code}",
            upstream_status=r.status_code,
        )

    try:
        token_info = r.json()
    except ValueError as e:
        log_warning(f"Token exchange answered a non-JSON body: {r.text[:200]}")
        raise UpstreamUnavailable("Token exchange answered a non-JSON body.") from e

    if not isinstance(token_info, dict) or "access_token" not in token_info:
        raise UpstreamUnavailable("Token exchange answered without an access_token.")

    log_success("Spotify token exchange successful.")
    return token_info
