"""In-memory queue store.

The store is the only owner of the shared queue for the lifetime of the
process. It is created empty at startup and is never persisted: a restart
resets it. FastAPI runs sync endpoints in a worker thread pool, so every read
and mutation happens under one re-entrant lock.

Each mutation bumps `version`. Callers that rewrite the whole queue from a
snapshot they read earlier pass that snapshot's version to `replace`, which
refuses the write if anything changed in between.
"""

import threading
from typing import Iterable, List, Optional, Tuple

from songqueue.core import QueueConflict, QueueEntry, log_info, log_warning


class QueueStore:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: List[QueueEntry] = []
        self._version = 0

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def get_all(self) -> List[QueueEntry]:
        with self._lock:
            return list(self._entries)

    def snapshot(self) -> Tuple[int, List[QueueEntry]]:
        with self._lock:
            return self._version, list(self._entries)

    def head(self) -> Optional[QueueEntry]:
        with self._lock:
            return self._entries[0] if self._entries else None

    def append(self, entry: QueueEntry) -> List[QueueEntry]:
        """Append to the tail. Policy checks are the caller's job."""
        with self._lock:
            self._entries.append(entry)
            self._bump()
            log_info(
                f"Queued '{entry.track.name}' for team {entry.team_name} "
                f"(position {len(self._entries)})."
            )
            return list(self._entries)

    def replace(
        self,
        entries: Iterable[QueueEntry],
        expected_version: Optional[int] = None,
    ) -> List[QueueEntry]:
        """
        Overwrite the whole queue. Contents are not validated.

        Without `expected_version` this is last-write-wins.
        """
        new_entries = list(entries)
        with self._lock:
            if expected_version is not None and expected_version != self._version:
                raise QueueConflict(expected_version, self._version)
            self._entries = new_entries
            self._bump()
            return list(self._entries)

    def remove_by_id(self, track_id: str) -> List[QueueEntry]:
        """Remove the first entry with this track id; unknown ids are a no-op."""
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.id == track_id:
                    del self._entries[index]
                    self._bump()
                    break
            return list(self._entries)

    def remove_head(self, expected_id: str) -> List[QueueEntry]:
        """
        Drop the head of the queue, but only if it is still `expected_id`.

        Playback uses this once the external player accepted a command for
        the head it read earlier; entries appended meanwhile are kept.
        """
        with self._lock:
            if self._entries and self._entries[0].id == expected_id:
                self._entries.pop(0)
                self._bump()
            else:
                log_warning(
                    f"Queue head changed before track {expected_id} could be removed; "
                    "leaving queue as is."
                )
            return list(self._entries)

    def clear(self) -> List[QueueEntry]:
        with self._lock:
            self._entries = []
            self._bump()
            return []

    def reset(self) -> None:
        """Return to the startup state (empty, version 0)."""
        with self._lock:
            self._entries = []
            self._version = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _bump(self) -> None:
        self._version += 1
