"""Public façade for the songqueue.core package.

This module exposes logging helpers, filesystem utilities, the error taxonomy
and base models that are safe to import from other packages. Callers should
import these cross-cutting concerns from this façade instead of the internal
submodules.
"""

from .errors import (
    EmptyQueue,
    InvalidCode,
    InvalidInput,
    NoDeviceAvailable,
    NotAuthenticated,
    NotAuthorized,
    QueueConflict,
    SongQueueError,
    TrackRejected,
    UpstreamUnavailable,
)
from .fs_utils import read_json_object
from .logging_utils import (
    configure_logging,
    log_error,
    log_info,
    log_section,
    log_step,
    log_success,
    log_warning,
    mask_token,
)
from .models import (
    ADMIN_CAPABILITIES,
    TEAM_CAPABILITIES,
    Capability,
    Identity,
    IdentityKind,
    QueueEntry,
    Track,
)

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "mask_token",
    "read_json_object",
    "SongQueueError",
    "InvalidInput",
    "TrackRejected",
    "InvalidCode",
    "NotAuthenticated",
    "NotAuthorized",
    "EmptyQueue",
    "NoDeviceAvailable",
    "QueueConflict",
    "UpstreamUnavailable",
    "Track",
    "QueueEntry",
    "Capability",
    "Identity",
    "IdentityKind",
    "TEAM_CAPABILITIES",
    "ADMIN_CAPABILITIES",
]
