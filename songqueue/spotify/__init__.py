"""Public façade for the songqueue.spotify package.

This module exposes the Spotify Web API integration: authorization-code flow,
track search and Spotify Connect playback helpers. Callers should import these
symbols from this façade instead of the internal modules.
"""

from .auth import build_spotify_auth_url, exchange_code_for_token
from .client import spotify_headers, spotify_request
from .player import get_devices, skip_to_next, start_playback, transfer_playback
from .search import is_playable_in_queue, search_tracks

__all__ = [
    "build_spotify_auth_url",
    "exchange_code_for_token",
    "spotify_headers",
    "spotify_request",
    "get_devices",
    "transfer_playback",
    "start_playback",
    "skip_to_next",
    "search_tracks",
    "is_playable_in_queue",
]
