"""Public façade for the songqueue.services package.

Queue policy and playback orchestration. API routes and the CLI go through
these services; they never mutate the stores directly.
"""

from .playback import PlaybackController, resolve_device
from .queue import QueueService, check_track_allowed

__all__ = [
    "QueueService",
    "check_track_allowed",
    "PlaybackController",
    "resolve_device",
]
