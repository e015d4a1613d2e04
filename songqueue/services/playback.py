"""Play / skip orchestration against Spotify Connect.

The queue is only a local prediction of what the external player does: the
head is removed after Spotify accepted the command, and nothing checks
afterwards that the player really is on that track.
"""

import threading
from typing import Any, Dict, Optional

from songqueue.core import (
    Capability,
    EmptyQueue,
    Identity,
    NoDeviceAvailable,
    QueueEntry,
    log_info,
    log_step,
    log_success,
)
from songqueue.data import QueueStore
from songqueue.identity import require
from songqueue.spotify import get_devices, skip_to_next, start_playback, transfer_playback


def resolve_device(access_token: str) -> Dict[str, Any]:
    """
    Return the active Spotify device, activating the first one if none is.

    Restricted devices are listed with a null id and cannot be targeted.
    """
    devices = [d for d in get_devices(access_token) if d.get("id")]
    if not devices:
        raise NoDeviceAvailable(
            "No Spotify device found. Please make sure Spotify is open on a device."
        )

    for device in devices:
        if device.get("is_active"):
            return device

    device = devices[0]
    log_step(f"No active device; transferring playback to {device.get('name')!r}.")
    transfer_playback(access_token, device["id"])
    return device


class PlaybackController:
    def __init__(self, store: QueueStore) -> None:
        self.store = store
        self._lock = threading.Lock()
        self._now_playing: Optional[QueueEntry] = None

    def current(self) -> Optional[QueueEntry]:
        with self._lock:
            return self._now_playing

    def play_next(self, identity: Identity, access_token: str) -> QueueEntry:
        """
        Play the head of the queue on the resolved device.

        Upstream failures propagate and leave the queue untouched.
        """
        require(identity, Capability.CONTROL_PLAYBACK)
        head = self.store.head()
        if head is None:
            raise EmptyQueue("The queue is empty.")
        device = resolve_device(access_token)

        log_step(f"Playing '{head.track.name}' ({head.team_name}) on {device.get('name')!r}...")
        start_playback(access_token, head.uri, device_id=device.get("id"))

        self.store.remove_head(head.id)
        with self._lock:
            self._now_playing = head
        log_success(f"Now playing '{head.track.name}'.")
        return head

    def skip(self, identity: Identity, access_token: str) -> Optional[QueueEntry]:
        """
        Send "next" to the player and drop the queue head, if any.

        An empty local queue still skips whatever Spotify is playing. The
        player picks the next item itself, so nothing is recorded as playing
        afterwards.
        """
        require(identity, Capability.CONTROL_PLAYBACK)
        head = self.store.head()
        device = resolve_device(access_token)

        log_step("Skipping to next track...")
        skip_to_next(access_token, device_id=device.get("id"))

        if head is not None:
            self.store.remove_head(head.id)
            log_info(f"Skipped; queue head '{head.track.name}' removed.")
        with self._lock:
            self._now_playing = None
        return head

    def reset(self) -> None:
        with self._lock:
            self._now_playing = None
