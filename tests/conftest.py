import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from api_main import app
from songqueue.api import deps
from songqueue.core import Track
from songqueue.identity import AccessGate, JsonFileIdentityVerifier

IDENTITY_CODES = {
    "teams": [
        {"team_code": "red-code", "team_name": "Red"},
        {"team_code": "blue-code", "team_name": "Blue"},
    ],
    "admins": [{"password": "admin-code", "name": "Alex"}],
}


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text or (json.dumps(payload) if payload is not None else "")
        self.content = self.text.encode("utf-8")
        self.reason = "OK" if status_code < 400 else "Error"

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


@pytest.fixture(autouse=True)
def fresh_state():
    deps.reset_state()
    yield
    deps.reset_state()
    app.dependency_overrides.clear()


@pytest.fixture
def codes_file(tmp_path: Path) -> Path:
    path = tmp_path / "identity_codes.json"
    path.write_text(json.dumps(IDENTITY_CODES), encoding="utf-8")
    return path


@pytest.fixture
def client(codes_file: Path) -> TestClient:
    app.dependency_overrides[deps.get_access_gate] = lambda: AccessGate(
        JsonFileIdentityVerifier(str(codes_file))
    )
    return TestClient(app)


def _login(client: TestClient, code: str) -> Dict[str, str]:
    response = client.post("/auth/verify", json={"code": code})
    assert response.status_code == 200
    return {"X-Session-Token": response.json()["session_token"]}


@pytest.fixture
def red_headers(client: TestClient) -> Dict[str, str]:
    return _login(client, "red-code")


@pytest.fixture
def blue_headers(client: TestClient) -> Dict[str, str]:
    return _login(client, "blue-code")


@pytest.fixture
def admin_headers(client: TestClient) -> Dict[str, str]:
    return _login(client, "admin-code")


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_track():
    def _make(
        track_id: str = "track-a",
        name: Optional[str] = None,
        duration_ms: int = 180000,
        explicit: bool = False,
    ) -> Track:
        return Track(
            id=track_id,
            name=name or f"Song {track_id}",
            artist_names=["Artist"],
            album_name="Album",
            duration_ms=duration_ms,
            uri=f"spotify:track:{track_id}",
            external_url=f"https://open.spotify.com/track/{track_id}",
            explicit=explicit,
        )

    return _make


@pytest.fixture
def spotify_item():
    """Raw Spotify track object, as /search returns it."""

    def _make(
        track_id: str = "track-a",
        duration_ms: int = 180000,
        explicit: bool = False,
    ) -> Dict[str, Any]:
        return {
            "id": track_id,
            "name": f"Song {track_id}",
            "artists": [{"name": "Artist One"}, {"name": "Artist Two"}],
            "album": {"name": "Album", "images": [{"url": "https://i.scdn.co/image/abc"}]},
            "duration_ms": duration_ms,
            "uri": f"spotify:track:{track_id}",
            "explicit": explicit,
            "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
            "popularity": 42,
        }

    return _make
