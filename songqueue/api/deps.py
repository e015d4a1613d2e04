"""FastAPI dependencies: process-wide stores and the acting identity.

The stores are module-level singletons created at import time, i.e. once per
server process. Tests reset them between cases.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from songqueue.config import SESSION_HEADER
from songqueue.core import Identity, NotAuthenticated
from songqueue.data import QueueStore, Session, SessionStore
from songqueue.identity import AccessGate, build_identity_verifier
from songqueue.services import PlaybackController, QueueService

from .errors import raise_http_error

queue_store = QueueStore()
session_store = SessionStore()
playback_controller = PlaybackController(queue_store)


def get_queue_store() -> QueueStore:
    return queue_store


def get_session_store() -> SessionStore:
    return session_store


def get_queue_service(store: QueueStore = Depends(get_queue_store)) -> QueueService:
    return QueueService(store)


def get_playback_controller() -> PlaybackController:
    return playback_controller


@lru_cache(maxsize=1)
def get_access_gate() -> AccessGate:
    return AccessGate(build_identity_verifier())


def get_current_session(
    session_token: Optional[str] = Header(default=None, alias=SESSION_HEADER),
    sessions: SessionStore = Depends(get_session_store),
) -> Session:
    session = sessions.get(session_token)
    if session is None:
        raise_http_error(NotAuthenticated("Please log in with your team code first."))
    return session


def get_current_identity(session: Session = Depends(get_current_session)) -> Identity:
    return session.identity


def reset_state() -> None:
    """Back to a fresh process: empty queue, no sessions, nothing playing."""
    queue_store.reset()
    session_store.clear()
    playback_controller.reset()
