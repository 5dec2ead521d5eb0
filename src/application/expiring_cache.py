"""Key-value cache with a per-entry time-to-live."""
import json
import logging
import time
from typing import Any, Callable, Optional
from src.domain.models import CacheEntry
from src.domain.storage_interface import IKeyValueStorage, StorageError


logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 3_600_000


def epoch_millis() -> float:
    """Current wall-clock time in milliseconds since epoch."""
    return time.time() * 1000


class ExpiringCache:
    """Thin wrapper over persistent storage storing ``{value, expiry}`` JSON.

    Entries are served only while the clock is before their expiry. Expired
    and corrupt entries are removed on read. Write failures are logged and
    otherwise ignored, so a full store behaves like a permanent miss.
    """

    def __init__(
        self,
        storage: IKeyValueStorage,
        clock: Callable[[], float] = epoch_millis,
        default_ttl_ms: int = DEFAULT_TTL_MS
    ):
        """Initialize the cache.

        Args:
            storage: Backing string store
            clock: Returns the current time in milliseconds since epoch
            default_ttl_ms: TTL used when set() is called without one
        """
        self._storage = storage
        self._clock = clock
        self._default_ttl_ms = default_ttl_ms

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for key if it has not expired."""
        raw = self._storage.get_item(key)
        if raw is None:
            return None

        try:
            item = json.loads(raw)
            entry = CacheEntry(value=item["value"], expiry=float(item["expiry"]))
        except (ValueError, TypeError, KeyError) as e:
            logger.error(f"Error reading cache entry {key!r}: {e}")
            self._storage.remove_item(key)
            return None

        if not entry.is_valid(self.now()):
            logger.debug(f"Cache entry {key!r} expired")
            self._storage.remove_item(key)
            return None

        return entry

    def set(self, key: str, value: Any, ttl_ms: Optional[int] = None) -> None:
        """Store value under key for ttl_ms milliseconds."""
        if ttl_ms is None:
            ttl_ms = self._default_ttl_ms
        item = {
            "value": value,
            "expiry": self.now() + ttl_ms,
        }
        try:
            self._storage.set_item(key, json.dumps(item))
        except (StorageError, TypeError, ValueError) as e:
            logger.error(f"Error writing cache entry {key!r}: {e}")

    def remove(self, key: str) -> None:
        self._storage.remove_item(key)
