import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from songqueue.config import SESSION_TIMEOUT_SECONDS
from songqueue.core import Identity, log_info


@dataclass
class Session:
    token: str
    identity: Identity
    created_at: float
    last_activity: float


class SessionStore:
    """
    Login sessions issued after a team/admin code was verified.

    A session expires after `timeout_seconds` without activity; every
    successful lookup counts as activity. Like the queue, sessions live in
    memory only.
    """

    def __init__(
        self,
        timeout_seconds: int = SESSION_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._timeout = timeout_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}

    def create(self, identity: Identity) -> Session:
        now = self._clock()
        session = Session(
            token=secrets.token_urlsafe(32),
            identity=identity,
            created_at=now,
            last_activity=now,
        )
        with self._lock:
            self._sessions[session.token] = session
        log_info(f"Session opened for {identity.kind.value} {identity.name}.")
        return session

    def get(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if now - session.last_activity > self._timeout:
                del self._sessions[token]
                log_info(f"Session for {session.identity.name} expired.")
                return None
            session.last_activity = now
            return session

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [
                token
                for token, session in self._sessions.items()
                if now - session.last_activity > self._timeout
            ]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()
