from urllib.parse import parse_qs, urlparse

import pytest
import requests

from songqueue.core import UpstreamUnavailable
from songqueue.spotify import (
    build_spotify_auth_url,
    exchange_code_for_token,
    is_playable_in_queue,
    search_tracks,
    spotify_request,
)


def test_search_filters_explicit_and_long_tracks(monkeypatch, fake_response, spotify_item) -> None:
    items = [
        spotify_item("ok"),
        spotify_item("explicit", explicit=True),
        spotify_item("too-long", duration_ms=300001),
        spotify_item("exactly-five", duration_ms=300000),
    ]
    seen = {}

    def fake_request(method, url, headers=None, params=None, json=None, timeout=None):
        seen.update(method=method, url=url, headers=headers, params=params)
        return fake_response(200, {"tracks": {"items": items}})

    monkeypatch.setattr("songqueue.spotify.client.requests.request", fake_request)

    result = search_tracks("daft punk", "token-123")

    assert [t["id"] for t in result] == ["ok", "exactly-five"]
    assert seen["url"].endswith("/search")
    assert seen["params"] == {"q": "daft punk", "type": "track", "limit": 5}
    assert seen["headers"] == {"Authorization": "Bearer token-123"}


def test_search_without_track_list_is_empty(monkeypatch, fake_response) -> None:
    monkeypatch.setattr(
        "songqueue.spotify.client.requests.request",
        lambda *a, **kw: fake_response(200, {"albums": {}}),
    )

    assert search_tracks("x", "token") == []


def test_is_playable_in_queue_needs_a_duration(spotify_item) -> None:
    item = spotify_item()
    del item["duration_ms"]

    assert not is_playable_in_queue(item)


def test_expired_token_is_reported_by_status(monkeypatch, fake_response) -> None:
    monkeypatch.setattr(
        "songqueue.spotify.client.requests.request",
        lambda *a, **kw: fake_response(
            401, {"error": {"status": 401, "message": "The access token expired"}}
        ),
    )

    with pytest.raises(UpstreamUnavailable) as exc_info:
        spotify_request("GET", "/search", "old-token")

    assert exc_info.value.upstream_status == 401
    assert exc_info.value.token_expired
    assert "access token expired" in str(exc_info.value)


def test_other_upstream_errors_are_not_token_expiry(monkeypatch, fake_response) -> None:
    monkeypatch.setattr(
        "songqueue.spotify.client.requests.request",
        lambda *a, **kw: fake_response(404, {"error": {"status": 404, "message": "Device not found"}}),
    )

    with pytest.raises(UpstreamUnavailable) as exc_info:
        spotify_request("PUT", "/me/player/play", "token")

    assert exc_info.value.upstream_status == 404
    assert not exc_info.value.token_expired


def test_network_error_has_no_upstream_status(monkeypatch) -> None:
    def boom(*a, **kw):
        raise requests.ConnectionError("no route")

    monkeypatch.setattr("songqueue.spotify.client.requests.request", boom)

    with pytest.raises(UpstreamUnavailable) as exc_info:
        spotify_request("GET", "/me/player/devices", "token")

    assert exc_info.value.upstream_status is None


def test_no_content_returns_none(monkeypatch, fake_response) -> None:
    monkeypatch.setattr(
        "songqueue.spotify.client.requests.request",
        lambda *a, **kw: fake_response(204),
    )

    assert spotify_request("POST", "/me/player/next", "token") is None


def test_auth_url_contains_client_scopes_and_redirect(monkeypatch) -> None:
    monkeypatch.setattr("songqueue.spotify.auth.SPOTIFY_CLIENT_ID", "client-abc")
    monkeypatch.setattr("songqueue.spotify.auth.SPOTIFY_REDIRECT_URI", "http://localhost:8888/callback")

    url = build_spotify_auth_url()
    parsed = urlparse(url)
    params = parse_qs(parsed.query)

    assert parsed.netloc == "accounts.spotify.com"
    assert params["client_id"] == ["client-abc"]
    assert params["response_type"] == ["code"]
    assert params["redirect_uri"] == ["http://localhost:8888/callback"]
    assert "user-modify-playback-state" in params["scope"][0].split()
    assert params["state"][0]


def test_auth_url_uses_random_state() -> None:
    first = parse_qs(urlparse(build_spotify_auth_url()).query)["state"]
    second = parse_qs(urlparse(build_spotify_auth_url()).query)["state"]

    assert first != second


def test_exchange_code_for_token(monkeypatch, fake_response) -> None:
    seen = {}

    def fake_post(url, data=None, timeout=None):
        seen.update(url=url, data=data)
        return fake_response(200, {"access_token": "new-token", "expires_in": 3600})

    monkeypatch.setattr("songqueue.spotify.auth.requests.post", fake_post)

    token_info = exchange_code_for_token("the-code")

    assert token_info["access_token"] == "new-token"
    assert seen["data"]["grant_type"] == "authorization_code"
    assert seen["data"]["code"] == "the-code"


def test_exchange_code_failure(monkeypatch, fake_response) -> None:
    monkeypatch.setattr(
        "songqueue.spotify.auth.requests.post",
        lambda *a, **kw: fake_response(400, {"error": "invalid_grant"}),
    )

    with pytest.raises(UpstreamUnavailable) as exc_info:
        exchange_code_for_token("bad-code")

    assert exc_info.value.upstream_status == 400


def test_exchange_code_non_json_answer(monkeypatch, fake_response) -> None:
    monkeypatch.setattr(
        "songqueue.spotify.auth.requests.post",
        lambda *a, **kw: fake_response(200, None, text="<html>Service Unavailable</html>"),
    )

    with pytest.raises(UpstreamUnavailable):
        exchange_code_for_token("the-code")
