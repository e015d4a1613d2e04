from fastapi import APIRouter, Depends, HTTPException

from songqueue.core import Identity, SongQueueError, log_step
from songqueue.data import QueueStore
from songqueue.services import QueueService

from ..deps import get_current_identity, get_queue_service, get_queue_store
from ..errors import raise_http_error
from .schemas import AddTrackRequest, QueueEntryOut, QueueResponse, ReplaceQueueRequest

router = APIRouter()


def _queue_response(store: QueueStore) -> QueueResponse:
    version, entries = store.snapshot()
    return QueueResponse(
        queue=[QueueEntryOut.from_entry(e) for e in entries],
        version=version,
    )


@router.get("", response_model=QueueResponse)
def get_queue(store: QueueStore = Depends(get_queue_store)) -> QueueResponse:
    """
    Current queue, head first. Clients poll this endpoint.
    """
    return _queue_response(store)


@router.post("", response_model=QueueResponse)
def add_track(
    body: AddTrackRequest,
    identity: Identity = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
) -> QueueResponse:
    """
    Append a track (a /search result item) for the caller's team.
    """
    if body.track is None:
        raise HTTPException(
            status_code=400,
            detail={"status": "invalid_input", "message": "No track provided"},
        )

    log_step(f"{identity.name} adds '{body.track.name}' to the queue...")
    try:
        service.add_track(identity, body.track.to_track())
    except SongQueueError as e:
        raise_http_error(e)
    return _queue_response(service.store)


@router.put("", response_model=QueueResponse)
def replace_queue(
    body: ReplaceQueueRequest,
    identity: Identity = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
) -> QueueResponse:
    """
    Overwrite the queue (admin reorder).

    Send the `version` from the GET /queue the new order was computed from;
    the write is refused with 409 if the queue changed in between.
    """
    try:
        service.replace(
            identity,
            [item.to_entry() for item in body.queue],
            expected_version=body.version,
        )
    except SongQueueError as e:
        raise_http_error(e)
    return _queue_response(service.store)


@router.delete("", response_model=QueueResponse)
def clear_queue(
    identity: Identity = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
) -> QueueResponse:
    try:
        service.clear(identity)
    except SongQueueError as e:
        raise_http_error(e)
    return _queue_response(service.store)


@router.delete("/{track_id}", response_model=QueueResponse)
def remove_track(
    track_id: str,
    identity: Identity = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
) -> QueueResponse:
    """
    Remove the first queued entry for this track id. Unknown ids are a no-op.
    """
    try:
        service.remove(identity, track_id)
    except SongQueueError as e:
        raise_http_error(e)
    return _queue_response(service.store)
