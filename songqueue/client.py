"""HTTP client for the song queue API.

Used by the `songqueue watch` command and the smoke test. Reading the queue
is the only call that is retried: a failed GET /queue is attempted again a
bounded number of times with a fixed delay before giving up.
"""

import time
from typing import Any, Callable, Dict, List, Optional

import requests

from songqueue.config import (
    API_BASE_URL,
    HTTP_TIMEOUT_SECONDS,
    QUEUE_READ_RETRIES,
    QUEUE_READ_RETRY_DELAY_SECONDS,
    SESSION_HEADER,
)
from songqueue.core import SongQueueError, UpstreamUnavailable, log_warning


class ApiError(SongQueueError):
    """Error answered by the song queue API, with its status and code."""

    def __init__(self, message: str, status_code: int, code: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code

    @property
    def token_expired(self) -> bool:
        return self.code == "token_expired"


def _api_error(resp: requests.Response) -> ApiError:
    try:
        data = resp.json()
    except ValueError:
        return ApiError(resp.text or f"HTTP {resp.status_code}", resp.status_code, "error")

    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, dict):
        return ApiError(
            detail.get("message") or str(detail),
            resp.status_code,
            detail.get("status") or "error",
        )
    if isinstance(data, dict) and data.get("success") is False:
        return ApiError(data.get("error") or "Login failed", resp.status_code, "invalid_code")
    return ApiError(str(detail or data), resp.status_code, "error")


class QueueClient:
    def __init__(
        self,
        base_url: str = API_BASE_URL,
        *,
        session_token: Optional[str] = None,
        access_token: Optional[str] = None,
        retries: int = QUEUE_READ_RETRIES,
        retry_delay: float = QUEUE_READ_RETRY_DELAY_SECONDS,
        http: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session_token = session_token
        self.access_token = access_token
        self.retries = retries
        self.retry_delay = retry_delay
        self.http = http or requests.Session()
        self._sleep = sleep

    def _headers(self) -> Dict[str, str]:
        if self.session_token:
            return {SESSION_HEADER: self.session_token}
        return {}

    def _call(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            resp = self.http.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers(),
                timeout=HTTP_TIMEOUT_SECONDS,
                **kwargs,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"Song queue API unreachable: {e}", service="song-queue") from e

        if resp.status_code >= 400:
            raise _api_error(resp)
        return resp.json()

    # --- queue ------------------------------------------------------------

    def get_queue(self) -> Dict[str, Any]:
        """
        GET /queue, retried on transport errors and 5xx answers.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._call("GET", "/queue")
            except UpstreamUnavailable as e:
                error: SongQueueError = e
            except ApiError as e:
                if e.status_code < 500:
                    raise
                error = e

            if attempt > self.retries:
                raise error
            log_warning(
                f"Reading the queue failed ({error}); "
                f"retry {attempt}/{self.retries} in {self.retry_delay:.1f}s."
            )
            self._sleep(self.retry_delay)

    def add_track(self, track: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("POST", "/queue", json={"track": track})

    def replace_queue(
        self,
        queue: List[Dict[str, Any]],
        version: Optional[int] = None,
    ) -> Dict[str, Any]:
        return self._call("PUT", "/queue", json={"queue": queue, "version": version})

    def clear_queue(self) -> Dict[str, Any]:
        return self._call("DELETE", "/queue")

    def remove_track(self, track_id: str) -> Dict[str, Any]:
        return self._call("DELETE", f"/queue/{track_id}")

    # --- login / search ---------------------------------------------------

    def verify(self, code: str) -> Dict[str, Any]:
        data = self._call("POST", "/auth/verify", json={"code": code})
        self.session_token = data["session_token"]
        return data

    def search(self, query: str) -> List[Dict[str, Any]]:
        data = self._call(
            "GET",
            "/search",
            params={"q": query, "access_token": self.access_token},
        )
        return data["tracks"]["items"]

    # --- playback ---------------------------------------------------------

    def play_next(self) -> Dict[str, Any]:
        return self._call("POST", "/playback/play-next", params={"access_token": self.access_token})

    def skip(self) -> Dict[str, Any]:
        return self._call("POST", "/playback/skip", params={"access_token": self.access_token})

    def now_playing(self) -> Optional[Dict[str, Any]]:
        return self._call("GET", "/playback/current").get("now_playing")
