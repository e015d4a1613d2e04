"""Spotify Connect calls used by the playback controller."""

from typing import Any, Dict, List, Optional

from .client import spotify_request


def get_devices(access_token: str) -> List[Dict[str, Any]]:
    data = spotify_request("GET", "/me/player/devices", access_token)
    devices = (data or {}).get("devices") or []
    return [d for d in devices if isinstance(d, dict)]


def transfer_playback(access_token: str, device_id: str, play: bool = False) -> None:
    spotify_request(
        "PUT",
        "/me/player",
        access_token,
        json={"device_ids": [device_id], "play": play},
    )


def start_playback(access_token: str, uri: str, device_id: Optional[str] = None) -> None:
    params = {"device_id": device_id} if device_id else None
    spotify_request(
        "PUT",
        "/me/player/play",
        access_token,
        params=params,
        json={"uris": [uri]},
    )


def skip_to_next(access_token: str, device_id: Optional[str] = None) -> None:
    params = {"device_id": device_id} if device_id else None
    spotify_request("POST", "/me/player/next", access_token, params=params)
