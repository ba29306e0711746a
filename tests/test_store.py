import json
from datetime import datetime, timezone

import pytest

from cupmanager.constants import ENTITY_MATCHES, ENTITY_TEAMS
from cupmanager.exceptions import (
    FileLoadException,
    FileSaveException,
    RecordNotFoundException,
    UnknownEntityKindException,
)
from cupmanager.store import FixedClock, InMemoryStore, JsonFileStore
from cupmanager.tournament import Cup


def test_insert_assigns_ids(store):
    first = store.insert(ENTITY_TEAMS, {"name": "A"})
    second = store.insert(ENTITY_TEAMS, {"id": "fixed", "name": "B"})
    assert first["id"]
    assert second["id"] == "fixed"
    assert store.get(ENTITY_TEAMS, "fixed")["name"] == "B"


def test_records_are_copied(store):
    record = store.insert(ENTITY_TEAMS, {"name": "A"})
    record["name"] = "changed"
    store.get(ENTITY_TEAMS, record["id"])["name"] = "changed too"
    assert store.get(ENTITY_TEAMS, record["id"])["name"] == "A"


def test_query_update_delete(store):
    store.insert(ENTITY_TEAMS, {"id": "a", "name": "A", "group": 1})
    store.insert(ENTITY_TEAMS, {"id": "b", "name": "B", "group": 1})
    store.insert(ENTITY_TEAMS, {"id": "c", "name": "C", "group": 2})

    assert [r["id"] for r in store.query(ENTITY_TEAMS, {"group": 1})] == ["a", "b"]
    assert store.first(ENTITY_TEAMS, {"group": 2})["id"] == "c"
    assert store.first(ENTITY_TEAMS, {"group": 3}) is None

    updated = store.update(ENTITY_TEAMS, "a", {"name": "A2"})
    assert updated == {"id": "a", "name": "A2", "group": 1}

    assert store.delete(ENTITY_TEAMS, {"group": 1}) == 2
    assert store.delete(ENTITY_TEAMS, {"group": 1}) == 0
    assert store.count(ENTITY_TEAMS) == 1


def test_update_missing_record(store):
    with pytest.raises(RecordNotFoundException):
        store.update(ENTITY_TEAMS, "missing", {"name": "X"})


def test_unknown_kind(store):
    with pytest.raises(UnknownEntityKindException):
        store.query("referees")


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "cup"
    store = JsonFileStore(path)
    assert store.path.suffix == ".json"

    stamp = datetime(2025, 6, 1, 18, 30, tzinfo=timezone.utc)
    store.insert(ENTITY_MATCHES, {"id": "m1", "home_score": 2, "played_at": stamp})

    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert data[ENTITY_MATCHES][0]["played_at"] == "2025-06-01T18:30:00+00:00"

    reopened = JsonFileStore(store.path)
    assert reopened.get(ENTITY_MATCHES, "m1") == {
        "id": "m1",
        "home_score": 2,
        "played_at": stamp,
    }


def test_json_store_keeps_a_played_cup(tmp_path):
    path = tmp_path / "cup.json"
    cup = Cup(JsonFileStore(path), FixedClock())
    tournament = cup.create_tournament()
    group = cup.get_groups(tournament.id)[0]
    match = cup.get_matches_for_group(group.id)[0]
    cup.record_group_result(match.id, 2, 1, "Rossi-2", "Verdi-1")

    reloaded = Cup(JsonFileStore(path), FixedClock())
    standings = reloaded.get_group_standings(group.id)
    assert [row.to_dict() for row in standings] == [
        row.to_dict() for row in cup.get_group_standings(group.id)
    ]
    assert [s.total_goals for s in reloaded.top_scorers()] == [2, 1]


def test_json_store_rejects_corrupt_files(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(FileLoadException):
        JsonFileStore(path)


def test_failed_save_keeps_previous_file(tmp_path):
    store = JsonFileStore(tmp_path / "cup.json")
    store.insert(ENTITY_TEAMS, {"id": "t1", "name": "Sq1"})
    before = store.path.read_text(encoding="utf-8")

    with pytest.raises(FileSaveException):
        store.insert(ENTITY_TEAMS, {"id": "t2", "name": "Sq2", "logo": object()})

    assert store.path.read_text(encoding="utf-8") == before
    assert [t["id"] for t in json.loads(before)[ENTITY_TEAMS]] == ["t1"]
    assert list(tmp_path.iterdir()) == [store.path]


def test_fixed_clock_moves_only_when_advanced():
    clock = FixedClock()
    start = clock.now()
    assert clock.now() == start
    assert clock.advance() > start


def test_in_memory_store_serialization():
    store = InMemoryStore()
    store.insert(ENTITY_TEAMS, {"id": "t", "name": "A", "updated_at": None})
    copy = InMemoryStore()
    copy.load_dict(store.to_dict())
    assert copy.get(ENTITY_TEAMS, "t") == {"id": "t", "name": "A", "updated_at": None}
