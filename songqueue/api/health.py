from fastapi import APIRouter, Depends

from songqueue.config import IDENTITY_BACKEND
from songqueue.data import QueueStore

from .deps import get_queue_store

router = APIRouter()


@router.get("/health")
def health(store: QueueStore = Depends(get_queue_store)) -> dict:
    version, entries = store.snapshot()
    return {
        "status": "ok",
        "queue_length": len(entries),
        "queue_version": version,
        "identity_backend": IDENTITY_BACKEND,
    }
