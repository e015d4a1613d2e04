import threading

import pytest

from songqueue.core import QueueConflict, QueueEntry
from songqueue.data import QueueStore


def _entry(make_track, track_id: str, team: str = "Red") -> QueueEntry:
    return QueueEntry(track=make_track(track_id), team_name=team)


def test_new_store_is_empty() -> None:
    store = QueueStore()

    assert store.get_all() == []
    assert store.version == 0
    assert store.head() is None


def test_appends_keep_call_order(make_track) -> None:
    store = QueueStore()
    ids = [f"t{i}" for i in range(5)]

    for track_id in ids:
        result = store.append(_entry(make_track, track_id))

    assert [e.id for e in result] == ids
    assert [e.id for e in store.get_all()] == ids
    assert len(store) == 5


def test_duplicate_tracks_are_not_deduplicated(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "same", "Red"))
    store.append(_entry(make_track, "same", "Blue"))

    assert [e.team_name for e in store.get_all()] == ["Red", "Blue"]


def test_get_all_returns_a_copy(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a"))

    entries = store.get_all()
    entries.clear()

    assert len(store.get_all()) == 1


def test_clear_always_yields_empty(make_track) -> None:
    store = QueueStore()
    assert store.clear() == []

    store.append(_entry(make_track, "a"))
    store.append(_entry(make_track, "b"))

    assert store.clear() == []
    assert store.get_all() == []


def test_remove_by_id_removes_first_match_only(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a", "Red"))
    store.append(_entry(make_track, "b", "Red"))
    store.append(_entry(make_track, "a", "Blue"))

    result = store.remove_by_id("a")

    assert [(e.id, e.team_name) for e in result] == [("b", "Red"), ("a", "Blue")]


def test_remove_by_unknown_id_is_a_noop(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a"))
    version = store.version

    result = store.remove_by_id("missing")

    assert [e.id for e in result] == ["a"]
    assert store.version == version


def test_replace_overwrites_without_validation(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a"))

    too_long = QueueEntry(track=make_track("long", duration_ms=999999), team_name="Red")
    result = store.replace([too_long])

    assert [e.id for e in result] == ["long"]


def test_every_mutation_bumps_version(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a"))
    store.append(_entry(make_track, "b"))
    store.remove_by_id("a")
    store.replace([])
    store.clear()

    assert store.version == 5


def test_replace_from_stale_snapshot_is_refused(make_track) -> None:
    # Two writers read the same snapshot and each appends "their" track
    # through a full replace. The second must not silently drop the first.
    store = QueueStore()
    store.append(_entry(make_track, "a"))
    version, snapshot = store.snapshot()

    store.replace(snapshot + [_entry(make_track, "from-writer-1")], expected_version=version)

    with pytest.raises(QueueConflict) as exc_info:
        store.replace(snapshot + [_entry(make_track, "from-writer-2")], expected_version=version)

    assert exc_info.value.expected_version == version
    assert [e.id for e in store.get_all()] == ["a", "from-writer-1"]


def test_replace_without_version_is_last_write_wins(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a"))
    _, snapshot = store.snapshot()

    store.replace(snapshot + [_entry(make_track, "from-writer-1")])
    store.replace(snapshot + [_entry(make_track, "from-writer-2")])

    assert [e.id for e in store.get_all()] == ["a", "from-writer-2"]


def test_remove_head_only_drops_expected_head(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a"))
    store.append(_entry(make_track, "b"))

    assert [e.id for e in store.remove_head("b")] == ["a", "b"]
    assert [e.id for e in store.remove_head("a")] == ["b"]


def test_remove_head_keeps_entries_appended_meanwhile(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a"))
    head = store.head()

    store.append(_entry(make_track, "added-while-playing"))
    store.remove_head(head.id)

    assert [e.id for e in store.get_all()] == ["added-while-playing"]


def test_concurrent_appends_are_all_kept(make_track) -> None:
    store = QueueStore()
    threads = [
        threading.Thread(target=store.append, args=(_entry(make_track, f"t{i}"),))
        for i in range(50)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.get_all()) == 50
    assert store.version == 50


def test_reset_returns_to_startup_state(make_track) -> None:
    store = QueueStore()
    store.append(_entry(make_track, "a"))

    store.reset()

    assert store.get_all() == []
    assert store.version == 0
