from typing import Any, Dict, Optional

import requests

from songqueue.config import HTTP_TIMEOUT_SECONDS, SPOTIFY_API_BASE
from songqueue.core import UpstreamUnavailable, log_warning


def spotify_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason or f"HTTP {resp.status_code}"
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        return error.get("message") or resp.reason or f"HTTP {resp.status_code}"
    if isinstance(error, str):
        return data.get("error_description") or error
    return resp.reason or f"HTTP {resp.status_code}"


def spotify_request(
    method: str,
    path: str,
    access_token: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
) -> Optional[Dict[str, Any]]:
    """
    Call the Spotify Web API and return the decoded JSON body.

    Player endpoints answer 204 No Content on success; those return None.
    Any non-2xx answer (or a network failure) raises UpstreamUnavailable with
    the upstream status attached, so callers can tell an expired token (401)
    from an outage without inspecting the message.
    """
    url = f"{SPOTIFY_API_BASE}{path}"
    try:
        resp = requests.request(
            method,
            url,
            headers=spotify_headers(access_token),
            params=params,
            json=json,
            timeout=HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise UpstreamUnavailable(f"Spotify request failed: {e}") from e

    if resp.status_code >= 400:
        message = _error_message(resp)
        log_warning(f"Spotify {method} {path} -> {resp.status_code}: {message}")
        raise UpstreamUnavailable(
            f"Spotify API error: {message}",
            upstream_status=resp.status_code,
        )

    if resp.status_code == 204 or not resp.content:
        return None

    try:
        return resp.json()
    except ValueError:
        # Some player endpoints answer 200 with a non-JSON body.
        return None
