"""
Key-Value Store Module

This module implements the capacity-bounded, thread-safe key-value store.

Every operation runs inside one critical section guarded by a single
threading.Lock, so concurrent callers always see the mapping in a
consistent state. Capacity rejections and missing keys are ordinary
results, never exceptions.
"""

import threading
from typing import Dict, Any, Tuple

from ..config.settings import StoreConfig


class KVStore:
    """
    In-memory key-value store with a fixed entry capacity.

    This class provides O(1) average-case time complexity for:
    - insert: Insert or overwrite a key-value pair (if not full)
    - fetch: Retrieve a value by key
    - remove: Delete a key-value pair

    Capacity policy:
        The capacity check happens before the existence check. Once the
        store holds `capacity` entries, every insert is rejected, including
        overwrites of keys that are already present, until a remove frees
        a slot.

    Internal Storage:
        Plain dict, key -> value. Insertion order is irrelevant.

    Attributes:
        capacity: Maximum number of live entries (immutable)
    """

    def __init__(self, config: StoreConfig = None):
        """
        Initialize the KV store.

        Args:
            config: StoreConfig with the capacity (default from settings.MAX_KEYS)
        """
        self._config = config if config is not None else StoreConfig.from_settings()
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        """Maximum number of live entries."""
        return self._config.capacity

    def insert(self, key: str, value: str) -> bool:
        """
        Insert or overwrite a key-value pair.

        Args:
            key: The key to store
            value: The value to associate with the key

        Returns:
            True if the pair was stored, False if the store is full
            (the mapping is left unchanged in that case)

        Time Complexity: O(1) average
        """
        with self._lock:
            if len(self._data) >= self._config.capacity:
                return False
            self._data[key] = value
            return True

    def fetch(self, key: str) -> Tuple[str, bool]:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up

        Returns:
            (value, True) if the key is present, ("", False) otherwise

        Time Complexity: O(1) average
        """
        with self._lock:
            if key in self._data:
                return self._data[key], True
            return "", False

    def remove(self, key: str) -> bool:
        """
        Delete a key-value pair.

        Args:
            key: The key to delete

        Returns:
            True if the key was deleted, False if it didn't exist

        Time Complexity: O(1) average
        """
        with self._lock:
            if key not in self._data:
                return False
            del self._data[key]
            return True

    def size(self) -> int:
        """Get the current number of live entries."""
        with self._lock:
            return len(self._data)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the store.

        Returns:
            Dictionary containing:
            - total_keys: Live entries in the store
            - max_size: Configured capacity
            - available: Free slots left before inserts are rejected
            - utilization: Current usage as fraction of capacity
        """
        with self._lock:
            total = len(self._data)

        capacity = self._config.capacity
        return {
            "total_keys": total,
            "max_size": capacity,
            "available": capacity - total,
            "utilization": total / capacity if capacity > 0 else 0,
        }
