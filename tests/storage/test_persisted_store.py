from __future__ import annotations

import logging

from radiant_crm.state.store import CrmStore
from radiant_crm.storage import InMemoryStorage, JsonFileStorage, PersistedStore


class BrokenStorage:
    def get_item(self, key):
        raise OSError("disk gone")

    def set_item(self, key, value):
        raise OSError("disk gone")

    def remove_item(self, key):
        raise OSError("disk gone")


def test_read_missing_key_returns_default():
    store = PersistedStore(InMemoryStorage())

    assert store.read("users", []) == []
    assert store.read("currentUser", None) is None


def test_read_corrupt_value_logs_and_returns_default(caplog):
    store = PersistedStore(InMemoryStorage({"users": "{not json"}))

    with caplog.at_level(logging.ERROR):
        assert store.read("users", ["fallback"]) == ["fallback"]

    assert "invalid JSON" in caplog.text


def test_backend_errors_never_raise(caplog):
    store = PersistedStore(BrokenStorage())

    with caplog.at_level(logging.ERROR):
        assert store.read("users", []) == []
        store.write("users", [{"id": "user-1"}])

    assert "Failed to read" in caplog.text
    assert "Failed to write" in caplog.text


def test_unserializable_value_is_logged_not_written(caplog):
    backend = InMemoryStorage()
    store = PersistedStore(backend)

    with caplog.at_level(logging.ERROR):
        store.write("users", {"bad": object()})

    assert backend.get_item("users") is None
    assert "Failed to serialize" in caplog.text


def test_json_file_storage_persists_between_instances(tmp_path):
    PersistedStore(JsonFileStorage(tmp_path)).write("customerData", [{"id": "data-1", "customerName": "Ravi"}])

    reopened = PersistedStore(JsonFileStorage(tmp_path))

    assert reopened.read("customerData", []) == [{"id": "data-1", "customerName": "Ravi"}]
    assert (tmp_path / "customerData.json").exists()
    assert not list(tmp_path.glob("*.tmp"))


def test_undecodable_slot_file_falls_back_to_default(tmp_path, caplog):
    (tmp_path / "users.json").write_bytes(b"\xff\xfe[not utf8\x80")
    store = PersistedStore(JsonFileStorage(tmp_path))

    with caplog.at_level(logging.ERROR):
        assert store.read("users", []) == []

    assert "Failed to read slot 'users'" in caplog.text


def test_crm_store_starts_over_undecodable_slot(tmp_path, clock):
    (tmp_path / "customerData.json").write_bytes(b"\xff\xfe\x80")

    crm = CrmStore(PersistedStore(JsonFileStorage(tmp_path)), clock=clock)

    assert crm.customer_data == ()
    assert len(crm.users) == 2
