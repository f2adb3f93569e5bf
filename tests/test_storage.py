import json

import pytest

from models.settings import UserSettings
from services.settings_service import SettingsService
from services.transaction_service import TransactionService
from storage import (
    JsonFileStorage,
    MemoryStorage,
    StorageError,
    close_storage,
    get_storage,
    init_storage,
    set_storage,
)


@pytest.fixture(autouse=True)
def reset_default_storage():
    close_storage()
    yield
    close_storage()


def test_memory_storage_basic_operations():
    storage = MemoryStorage({"a": "1"})
    storage.set("b", "2")
    assert storage.get("a") == "1"
    assert sorted(storage.keys()) == ["a", "b"]
    storage.remove("a")
    storage.remove("missing")
    assert storage.get("a") is None


def test_json_file_storage_persists_between_instances(tmp_path):
    path = tmp_path / "data" / "store.json"
    JsonFileStorage(path).set("financeflow_language", "ta-IN")

    reopened = JsonFileStorage(path)
    assert reopened.get("financeflow_language") == "ta-IN"
    assert json.loads(path.read_text(encoding="utf-8")) == {"financeflow_language": "ta-IN"}


def test_json_file_storage_remove(tmp_path):
    path = tmp_path / "store.json"
    storage = JsonFileStorage(path)
    storage.set("k", "v")
    storage.remove("k")
    assert JsonFileStorage(path).keys() == []


def test_json_file_storage_moves_corrupt_file_aside(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    storage = JsonFileStorage(path)

    assert storage.keys() == []
    assert not path.exists()
    assert (tmp_path / "store.json.corrupt").read_text(encoding="utf-8") == "{not json"

    storage.set("k", "v")
    assert JsonFileStorage(path).get("k") == "v"


def test_json_file_storage_moves_non_string_values_aside(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"k": [1, 2]}), encoding="utf-8")

    assert JsonFileStorage(path).get("k") is None
    assert (tmp_path / "store.json.corrupt").exists()


def test_services_start_empty_on_corrupt_default_storage(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    init_storage(str(path))

    assert TransactionService().get_transactions() == []
    assert SettingsService().get_settings() == UserSettings()


def test_json_file_storage_failed_write_raises_and_rolls_back(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    storage = JsonFileStorage(blocker / "store.json")

    with pytest.raises(StorageError):
        storage.set("k", "v")
    assert storage.get("k") is None


def test_init_storage_uses_file_backend_for_path(tmp_path):
    storage = init_storage(str(tmp_path / "store.json"))
    assert isinstance(storage, JsonFileStorage)
    assert get_storage() is storage
    assert init_storage() is storage


def test_set_storage_replaces_default():
    custom = MemoryStorage()
    set_storage(custom)
    assert get_storage() is custom
