"""
Tests for the key-value backends and the tolerant collection loader.
"""
import json
import logging
from datetime import datetime, timezone

import pytest

from db import local_store
from db.local_store import JsonFileKeyValueStore, MemoryKeyValueStore
from models.alert import Alert
from models.incident import Incident
from services.defaults import default_alerts, default_incidents
from services.incident_state import IncidentStateManager
from services.persistence import CollectionStore

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def collections():
    return CollectionStore(MemoryKeyValueStore())


def test_missing_key_returns_copy_of_default(collections):
    default = default_incidents(NOW)
    loaded = collections.load("oasis-incidents", Incident, default)
    assert loaded == default
    assert loaded[0] is not default[0]


@pytest.mark.parametrize("raw", [
    "{not json",
    '{"id": "1"}',
    '[{"id": "1", "type": "theft"}]',
    '[{"id": "1", "title": "x", "description": "d", "severity": "extreme", '
    '"type": "info", "time": "2026-10-19T12:00:00Z", "status": "active"}]',
])
def test_malformed_entry_falls_back(raw, caplog):
    collections = CollectionStore(MemoryKeyValueStore({"oasis-alerts": raw}))
    default = default_alerts(NOW)
    with caplog.at_level(logging.WARNING):
        loaded = collections.load("oasis-alerts", Alert, default)
    assert loaded == default
    assert "oasis-alerts" in caplog.text


def test_read_error_falls_back():
    class Unreadable(MemoryKeyValueStore):
        def get_item(self, key):
            raise ConnectionError("backend down")

    default = default_alerts(NOW)
    assert CollectionStore(Unreadable()).load("oasis-alerts", Alert, default) == default


def test_save_then_load_preserves_values_and_order(collections):
    records = list(reversed(default_alerts(NOW)))
    collections.save("oasis-alerts", records)
    assert collections.load("oasis-alerts", Alert, []) == records


def test_saved_form_is_a_json_array(collections):
    collections.save("oasis-incidents", default_incidents(NOW))
    payload = json.loads(collections.store.get_item("oasis-incidents"))
    assert isinstance(payload, list)
    assert payload[0]["id"] == "1"
    assert payload[0]["location"] == {"lat": 29.72, "lng": -95.34, "name": "Library"}


def test_naive_timestamps_are_read_as_utc(collections):
    row = default_incidents(NOW)[0].model_dump(mode="json")
    row["time"] = "2026-10-19T10:00:00"
    collections.store.set_item("oasis-incidents", json.dumps([row]))
    loaded = collections.load("oasis-incidents", Incident, [])
    assert loaded[0].time == datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)


def test_remove(collections):
    collections.save("oasis-alerts", default_alerts(NOW))
    collections.remove("oasis-alerts")
    assert collections.store.get_item("oasis-alerts") is None


# ---------------- file backend ----------------

def test_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "state.json"
    store = JsonFileKeyValueStore(path)
    assert store.get_item("k") is None

    store.set_item("k", "v1")
    store.set_item("other", "v2")
    assert JsonFileKeyValueStore(path).get_item("k") == "v1"

    store.remove_item("k")
    assert store.get_item("k") is None
    assert store.get_item("other") == "v2"
    store.remove_item("k")  # already gone


def test_file_store_tolerates_corrupt_file(tmp_path, caplog):
    path = tmp_path / "state.json"
    path.write_text("garbage", encoding="utf-8")
    store = JsonFileKeyValueStore(path)
    with caplog.at_level(logging.WARNING):
        assert store.get_item("oasis-incidents") is None
    store.set_item("oasis-incidents", "[]")
    assert json.loads(path.read_text(encoding="utf-8")) == {"oasis-incidents": "[]"}


def test_file_store_recovers_from_undecodable_file(tmp_path, caplog):
    path = tmp_path / "state.json"
    path.write_bytes(b"\xff\xfe garbage")
    store = JsonFileKeyValueStore(path)
    with caplog.at_level(logging.WARNING):
        assert store.get_item("oasis-incidents") is None
    assert "could not be read" in caplog.text

    store.set_item("oasis-incidents", "[]")
    assert json.loads(path.read_text(encoding="utf-8")) == {"oasis-incidents": "[]"}


def test_manager_keeps_writing_after_undecodable_file(tmp_path, clock, lot_a):
    path = tmp_path / "state.json"
    path.write_bytes(b"\xff\xfe garbage")
    manager = IncidentStateManager(JsonFileKeyValueStore(path), clock=clock)
    manager.add_incident({"type": "theft", "description": "bike", "reporter": "Jane", "location": lot_a})

    restarted = IncidentStateManager(JsonFileKeyValueStore(path), clock=clock)
    assert len(restarted.incidents) == 3
    assert restarted.incidents == manager.incidents


def test_file_store_treats_directory_as_empty(tmp_path):
    store = JsonFileKeyValueStore(tmp_path)
    assert store.get_item("oasis-alerts") is None


def test_file_store_ignores_non_object_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFileKeyValueStore(path).get_item("anything") is None


# ---------------- backend selection ----------------

def test_store_from_env_memory(monkeypatch):
    monkeypatch.setattr(local_store, "STORE_BACKEND", "memory")
    assert isinstance(local_store.store_from_env(), MemoryKeyValueStore)


def test_store_from_env_file(monkeypatch, tmp_path):
    monkeypatch.setattr(local_store, "STORE_BACKEND", "file")
    monkeypatch.setattr(local_store, "STORE_PATH", str(tmp_path / "s.json"))
    store = local_store.store_from_env()
    assert isinstance(store, JsonFileKeyValueStore)
    assert store.path == tmp_path / "s.json"


def test_store_from_env_unknown(monkeypatch):
    monkeypatch.setattr(local_store, "STORE_BACKEND", "redis")
    with pytest.raises(ValueError):
        local_store.store_from_env()
