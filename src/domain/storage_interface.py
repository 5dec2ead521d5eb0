"""Key-value storage interface (port) backing the expiring cache.

Mirrors the browser local storage contract: string keys, string values.
"""
from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Raised when a value cannot be persisted (full or unwritable store)."""
    pass


class IKeyValueStorage(ABC):
    """Abstract interface for persistent string storage."""
    
    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key is absent."""
        pass
    
    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a string under key.
        
        Raises:
            StorageError: When the value cannot be persisted
        """
        pass
    
    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key if present."""
        pass
