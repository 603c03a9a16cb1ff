from unittest.mock import MagicMock

import pytest

from wishlink.core.config import Settings
from wishlink.db.store import JsonFileStore, MemoryStore, MongoStore, create_store


@pytest.fixture(params=["memory", "file"])
def kv(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(str(tmp_path / "store"))


def test_get_returns_default_when_absent(kv):
    assert kv.get("missing", []) == []
    assert kv.get("missing") is None


def test_set_overwrites_whole_value(kv):
    kv.set("wishlink_users", {"5551234567": {"phone": "5551234567"}})
    kv.set("wishlink_users", {"5550000000": {"phone": "5550000000"}})
    assert kv.get("wishlink_users", {}) == {"5550000000": {"phone": "5550000000"}}


def test_default_is_not_shared_between_calls(kv):
    first = kv.get("missing", [])
    first.append("mutated")
    assert kv.get("missing", []) == []


def test_null_value_is_stored(kv):
    kv.set("wishlink_current_user", None)
    assert kv.get("wishlink_current_user", "fallback") is None


def test_corrupt_value_falls_back_to_default():
    store = MemoryStore()
    store.data["wishlink_wishes"] = "{not json"
    assert store.get("wishlink_wishes", []) == []


def test_corrupt_file_falls_back_to_default(tmp_path):
    store = JsonFileStore(str(tmp_path))
    (tmp_path / "wishlink_wishes.json").write_text("[{broken", encoding="utf-8")
    assert store.get("wishlink_wishes", []) == []


def test_file_store_survives_reopen(tmp_path):
    JsonFileStore(str(tmp_path)).set("wishlink_current_user", "5551234567")
    assert JsonFileStore(str(tmp_path)).get("wishlink_current_user") == "5551234567"


def test_file_store_leaves_no_temp_files(tmp_path):
    store = JsonFileStore(str(tmp_path))
    store.set("wishlink_wishes", [])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["wishlink_wishes.json"]


def test_delete(kv):
    kv.set("key", 1)
    kv.delete("key")
    kv.delete("key")
    assert kv.get("key", 0) == 0


def test_mongo_store_reads_and_writes_documents():
    collection = MagicMock()
    collection.find_one.return_value = {"_id": "wishlink_users", "value": '{"a": 1}'}
    store = MongoStore(collection)

    assert store.get("wishlink_users", {}) == {"a": 1}
    collection.find_one.assert_called_with({"_id": "wishlink_users"})

    store.set("wishlink_users", {"b": 2})
    collection.replace_one.assert_called_with(
        {"_id": "wishlink_users"},
        {"_id": "wishlink_users", "value": '{"b": 2}'},
        upsert=True,
    )


def test_mongo_store_missing_and_corrupt_documents():
    collection = MagicMock()
    store = MongoStore(collection)

    collection.find_one.return_value = None
    assert store.get("wishlink_wishes", []) == []

    collection.find_one.return_value = {"_id": "wishlink_wishes", "value": "nope"}
    assert store.get("wishlink_wishes", []) == []


def test_create_store_selects_backend(tmp_path):
    assert isinstance(create_store(Settings(STORAGE_BACKEND="memory")), MemoryStore)

    file_store = create_store(Settings(STORAGE_BACKEND="file", STORAGE_DIR=str(tmp_path)))
    assert isinstance(file_store, JsonFileStore)
