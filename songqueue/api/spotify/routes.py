from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from songqueue.core import SongQueueError
from songqueue.spotify import search_tracks

from ..errors import raise_http_error

router = APIRouter()


@router.get("/search")
def search(
    q: Optional[str] = Query(default=None),
    access_token: Optional[str] = Query(default=None),
) -> dict:
    """
    Proxy to Spotify track search.

    Explicit tracks and tracks longer than 5 minutes are filtered out.
    Response shape mirrors Spotify's: {"tracks": {"items": [...]}}.
    An expired token is answered with 401 / "token_expired".
    """
    if not q or not access_token:
        raise HTTPException(
            status_code=400,
            detail={"status": "invalid_input", "message": "Missing query or access token"},
        )

    try:
        items = search_tracks(q, access_token)
    except SongQueueError as e:
        raise_http_error(e)

    return {"tracks": {"items": items}}
