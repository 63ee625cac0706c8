import json

import pytest

from bazi_cipher import JsonFileStore, MemoryStore, PersistenceError
from bazi_cipher.storage import default_store_path


class TestMemoryStore:
    def test_get_set_delete(self):
        store = MemoryStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        store.delete("k")
        assert store.get("k") is None


class TestJsonFileStore:
    def test_missing_file_reads_empty(self, tmp_path):
        assert JsonFileStore(tmp_path / "store.json").get("k") is None

    def test_set_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = JsonFileStore(path)
        store.set("k", "值")
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "值"}
        assert JsonFileStore(path).get("k") == "值"

    def test_set_keeps_other_keys(self, tmp_path):
        store = JsonFileStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")
        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonFileStore(path).get("k")

    def test_non_object_file_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonFileStore(path).get("k")

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonFileStore(blocker / "store.json").set("k", "v")


def test_default_store_path_honours_env(monkeypatch, tmp_path):
    monkeypatch.setenv("BAZI_CIPHER_STORE", str(tmp_path / "custom.json"))
    assert default_store_path() == tmp_path / "custom.json"


def test_failed_save_removes_temp_file(tmp_path, monkeypatch):
    def refuse(src, dst):
        raise OSError("replace refused")

    monkeypatch.setattr("bazi_cipher.storage.os.replace", refuse)
    path = tmp_path / "store.json"
    with pytest.raises(PersistenceError):
        JsonFileStore(path).set("k", "v")
    assert list(tmp_path.iterdir()) == []
