from typing import Iterable, List, Optional

from songqueue.config import MAX_TRACK_DURATION_MS
from songqueue.core import (
    Capability,
    Identity,
    QueueEntry,
    Track,
    TrackRejected,
    log_step,
)
from songqueue.data import QueueStore
from songqueue.identity import require


def check_track_allowed(track: Track) -> None:
    """
    Add-time policy, independent of the search filter.

    Exactly 5:00 is allowed; one millisecond more is not.
    """
    if track.explicit:
        raise TrackRejected(f"'{track.name}' is explicit and cannot be queued.")
    if track.duration_ms < 0:
        raise TrackRejected(f"'{track.name}' has an invalid duration.")
    if track.duration_ms > MAX_TRACK_DURATION_MS:
        raise TrackRejected(f"'{track.name}' is longer than 5 minutes and cannot be queued.")


class QueueService:
    """Capability checks and add policy in front of the QueueStore."""

    def __init__(self, store: QueueStore) -> None:
        self.store = store

    def list_entries(self) -> List[QueueEntry]:
        return self.store.get_all()

    def add_track(self, identity: Identity, track: Track) -> List[QueueEntry]:
        require(identity, Capability.ADD_TRACK)
        check_track_allowed(track)
        return self.store.append(QueueEntry(track=track, team_name=identity.name))

    def replace(
        self,
        identity: Identity,
        entries: Iterable[QueueEntry],
        expected_version: Optional[int] = None,
    ) -> List[QueueEntry]:
        require(identity, Capability.REMOVE_TRACK)
        log_step(f"{identity.name} is rewriting the queue.")
        return self.store.replace(entries, expected_version=expected_version)

    def remove(self, identity: Identity, track_id: str) -> List[QueueEntry]:
        require(identity, Capability.REMOVE_TRACK)
        return self.store.remove_by_id(track_id)

    def clear(self, identity: Identity) -> List[QueueEntry]:
        require(identity, Capability.CLEAR_QUEUE)
        log_step(f"{identity.name} cleared the queue.")
        return self.store.clear()
