from typing import Any, Dict, List

from songqueue.config import MAX_TRACK_DURATION_MS, SEARCH_LIMIT
from songqueue.core import log_info, log_step

from .client import spotify_request


def is_playable_in_queue(item: Dict[str, Any]) -> bool:
    """Search-side filter: no explicit tracks, nothing over 5 minutes."""
    duration = item.get("duration_ms")
    if not isinstance(duration, int):
        return False
    return not item.get("explicit", False) and duration <= MAX_TRACK_DURATION_MS


def search_tracks(
    query: str,
    access_token: str,
    limit: int = SEARCH_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Search Spotify tracks and return the raw items that may be queued.

    A response without `tracks.items` is treated as "no results".
    """
    log_step(f"Searching Spotify for {query!r}...")
    data = spotify_request(
        "GET",
        "/search",
        access_token,
        params={"q": query, "type": "track", "limit": limit},
    )

    items = ((data or {}).get("tracks") or {}).get("items")
    if not isinstance(items, list):
        log_info("Spotify search returned no track list.")
        return []

    filtered = [item for item in items if isinstance(item, dict) and is_playable_in_queue(item)]
    log_info(f"Search {query!r}: {len(filtered)}/{len(items)} tracks kept after filtering.")
    return filtered
