"""Error taxonomy shared by the queue, identity, Spotify and API layers.

Every error carries the HTTP status the API layer answers with and a short
machine-readable code that clients can switch on.
"""

from typing import Optional


class SongQueueError(Exception):
    status_code: int = 500
    code: str = "error"


class InvalidInput(SongQueueError):
    """A required field is missing or malformed."""

    status_code = 400
    code = "invalid_input"


class TrackRejected(InvalidInput):
    """The track breaks the queue policy (explicit, or longer than 5 minutes)."""

    code = "track_rejected"


class InvalidCode(SongQueueError):
    """No team or admin matches the submitted code."""

    status_code = 401
    code = "invalid_code"


class NotAuthenticated(SongQueueError):
    """Missing, unknown or expired session token."""

    status_code = 401
    code = "unauthenticated"


class NotAuthorized(SongQueueError):
    """The identity lacks the capability required by the operation."""

    status_code = 403
    code = "not_authorized"


class EmptyQueue(SongQueueError):
    status_code = 409
    code = "empty_queue"


class NoDeviceAvailable(SongQueueError):
    status_code = 409
    code = "no_device"


class QueueConflict(SongQueueError):
    """A replace was computed from an outdated snapshot of the queue."""

    status_code = 409
    code = "queue_conflict"

    def __init__(self, expected_version: int, current_version: int):
        super().__init__(
            f"Queue changed since version {expected_version} "
            f"(current version is {current_version})."
        )
        self.expected_version = expected_version
        self.current_version = current_version


class UpstreamUnavailable(SongQueueError):
    """
    A call to an external service (Spotify, identity store) failed.

    `upstream_status` is the HTTP status returned by the service, or None when
    the request never got an answer (DNS, timeout, connection reset).
    """

    status_code = 502
    code = "upstream_unavailable"

    def __init__(
        self,
        message: str,
        *,
        service: str = "spotify",
        upstream_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.service = service
        self.upstream_status = upstream_status

    @property
    def token_expired(self) -> bool:
        return self.upstream_status == 401
