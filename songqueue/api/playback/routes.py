from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from songqueue.core import Capability, Identity, QueueEntry, SongQueueError
from songqueue.identity import require
from songqueue.services import PlaybackController

from ..deps import get_current_identity, get_playback_controller
from ..errors import raise_http_error
from ..queue.schemas import QueueEntryOut
from .schemas import NowPlayingResponse, PlaybackResponse

router = APIRouter()


def _authorize(identity: Identity, access_token: Optional[str]) -> str:
    try:
        require(identity, Capability.CONTROL_PLAYBACK)
    except SongQueueError as e:
        raise_http_error(e)
    if not access_token:
        raise HTTPException(
            status_code=400,
            detail={"status": "invalid_input", "message": "Missing Spotify access token"},
        )
    return access_token


def _playback_response(controller: PlaybackController, played: Optional[QueueEntry]) -> PlaybackResponse:
    version, entries = controller.store.snapshot()
    return PlaybackResponse(
        played=QueueEntryOut.from_entry(played) if played else None,
        queue=[QueueEntryOut.from_entry(e) for e in entries],
        version=version,
    )


@router.post("/play-next", response_model=PlaybackResponse)
def play_next(
    access_token: Optional[str] = Query(default=None),
    identity: Identity = Depends(get_current_identity),
    controller: PlaybackController = Depends(get_playback_controller),
) -> PlaybackResponse:
    """
    Admin only: play the head of the queue on the user's Spotify device and
    drop it from the queue.
    """
    token = _authorize(identity, access_token)
    try:
        played = controller.play_next(identity, token)
    except SongQueueError as e:
        raise_http_error(e)
    return _playback_response(controller, played)


@router.post("/skip", response_model=PlaybackResponse)
def skip(
    access_token: Optional[str] = Query(default=None),
    identity: Identity = Depends(get_current_identity),
    controller: PlaybackController = Depends(get_playback_controller),
) -> PlaybackResponse:
    token = _authorize(identity, access_token)
    try:
        played = controller.skip(identity, token)
    except SongQueueError as e:
        raise_http_error(e)
    return _playback_response(controller, played)


@router.get("/current", response_model=NowPlayingResponse)
def current(
    controller: PlaybackController = Depends(get_playback_controller),
) -> NowPlayingResponse:
    entry = controller.current()
    return NowPlayingResponse(
        now_playing=QueueEntryOut.from_entry(entry) if entry else None
    )
