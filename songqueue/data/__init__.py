"""Public façade for the songqueue.data package.

This module exposes the in-memory stores (queue and login sessions) that are
safe to import from other packages. Callers should use this façade instead of
importing from the internal modules directly.
"""

from .queue_store import QueueStore
from .sessions import Session, SessionStore

__all__ = [
    "QueueStore",
    "Session",
    "SessionStore",
]
