from typing import NoReturn

from fastapi import HTTPException

from songqueue.core import SongQueueError, UpstreamUnavailable, log_error


def raise_http_error(exc: SongQueueError) -> NoReturn:
    """
    Turn a domain error into the HTTP error answered to the client.

    An upstream 401 means the user's Spotify token expired: it is answered
    as 401/token_expired so the UI can ask for a reconnect.
    """
    status_code = exc.status_code
    code = exc.code
    if isinstance(exc, UpstreamUnavailable):
        log_error(f"{exc.service} call failed: {exc}")
        if exc.token_expired:
            status_code = 401
            code = "token_expired"

    raise HTTPException(
        status_code=status_code,
        detail={"status": code, "message": str(exc)},
    ) from exc
