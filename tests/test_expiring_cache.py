"""Tests for the expiring cache."""
import json
from src.application.expiring_cache import DEFAULT_TTL_MS, ExpiringCache
from tests.fakes import InMemoryStorage, ManualClock


def test_set_then_get_within_ttl():
    """Test that a fresh entry is returned with its expiry."""
    clock = ManualClock()
    cache = ExpiringCache(InMemoryStorage(), clock=clock)
    
    cache.set("key", {"a": 1})
    entry = cache.get("key")
    
    assert entry.value == {"a": 1}
    assert entry.expiry == clock.now_ms + DEFAULT_TTL_MS


def test_get_after_ttl_removes_entry():
    """Test that expired entries are deleted on read."""
    clock = ManualClock()
    storage = InMemoryStorage()
    cache = ExpiringCache(storage, clock=clock)
    
    cache.set("key", "value", ttl_ms=1000)
    clock.advance(1000)
    
    assert cache.get("key") is None
    assert storage.get_item("key") is None


def test_custom_default_ttl():
    clock = ManualClock()
    cache = ExpiringCache(InMemoryStorage(), clock=clock, default_ttl_ms=5000)
    
    cache.set("key", 1)
    clock.advance(4999)
    
    assert cache.get("key").value == 1


def test_corrupt_entry_is_removed():
    """Test that unparseable entries count as a miss and are deleted."""
    storage = InMemoryStorage()
    storage.set_item("broken", "{not json")
    storage.set_item("incomplete", json.dumps({"value": 1}))
    cache = ExpiringCache(storage, clock=ManualClock())
    
    assert cache.get("broken") is None
    assert cache.get("incomplete") is None
    assert storage.get_item("broken") is None
    assert storage.get_item("incomplete") is None


def test_missing_key():
    cache = ExpiringCache(InMemoryStorage(), clock=ManualClock())
    
    assert cache.get("absent") is None


def test_full_storage_is_a_miss():
    """Test that a quota error on write is swallowed."""
    cache = ExpiringCache(InMemoryStorage(quota=10), clock=ManualClock())
    
    cache.set("key", "x" * 100)
    
    assert cache.get("key") is None


def test_stored_format():
    """Test the serialized {value, expiry} layout."""
    storage = InMemoryStorage()
    cache = ExpiringCache(storage, clock=ManualClock(now_ms=0))
    
    cache.set("key", [1, 2], ttl_ms=10)
    
    assert json.loads(storage.get_item("key")) == {"value": [1, 2], "expiry": 10}


def test_remove():
    storage = InMemoryStorage()
    cache = ExpiringCache(storage, clock=ManualClock())
    cache.set("key", "value")

    cache.remove("key")
    cache.remove("absent")

    assert storage.get_item("key") is None
