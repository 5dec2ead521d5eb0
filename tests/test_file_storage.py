"""Tests for the key-value storage implementations."""
import os
import pytest
from src.domain.storage_interface import StorageError
from src.infrastructure.file_storage import JsonFileStorage
from tests.fakes import InMemoryStorage


def test_json_file_roundtrip_across_instances(tmp_path):
    """Test that a second instance sees the first one's writes."""
    path = tmp_path / "cache" / "store.json"
    JsonFileStorage(str(path)).set_item("theme", "dark")
    
    storage = JsonFileStorage(str(path))
    
    assert storage.get_item("theme") == "dark"
    assert storage.keys() == ["theme"]


def test_json_file_remove(tmp_path):
    storage = JsonFileStorage(str(tmp_path / "store.json"))
    storage.set_item("a", "1")
    storage.set_item("b", "2")
    
    storage.remove_item("a")
    storage.remove_item("missing")
    
    assert storage.get_item("a") is None
    assert storage.get_item("b") == "2"


def test_malformed_file_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2", encoding="utf-8")
    storage = JsonFileStorage(str(path))
    
    assert storage.get_item("a") is None
    
    storage.set_item("a", "1")
    
    assert storage.get_item("a") == "1"


def test_unwritable_location_raises_storage_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    storage = JsonFileStorage(str(blocker / "store.json"))
    
    with pytest.raises(StorageError):
        storage.set_item("a", "1")


def test_in_memory_quota():
    storage = InMemoryStorage(quota=5)
    storage.set_item("a", "12345")
    
    with pytest.raises(StorageError):
        storage.set_item("b", "x")
    
    storage.set_item("a", "54321")
    assert storage.get_item("a") == "54321"


def test_failed_replace_removes_temp_file(tmp_path, monkeypatch):
    """Test that a write failing after the temp file exists leaves no temp file."""
    storage = JsonFileStorage(str(tmp_path / "store.json"))
    storage.set_item("a", "1")

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(StorageError):
        storage.set_item("b", "2")

    assert list(tmp_path.glob(".storage-*")) == []
    assert storage.get_item("b") is None
    assert storage.get_item("a") == "1"
