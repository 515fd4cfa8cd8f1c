"""
Key-Value Store Module

This module implements the in-memory mapping that commands operate on.
"""

from typing import Any, Dict, Optional


class KVStore:
    """
    In-memory key-value store.

    This class provides O(1) average-case time complexity for:
    - set: Insert or update a key-value pair
    - get: Retrieve a value by key
    - delete: Remove a key-value pair
    - exists: Check if a key exists

    Keys and values are plain strings. Nothing is persisted; the store lives
    for one run of the interpreter.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._store: Dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        """
        Insert or update a key-value pair.

        Args:
            key: The key to store
            value: The value to associate with the key
        """
        self._store[key] = value

    def get(self, key: str) -> Optional[str]:
        """
        Retrieve the value for a given key.

        Returns:
            The value if found, None otherwise
        """
        return self._store.get(key)

    def delete(self, key: str) -> bool:
        """
        Delete a key-value pair.

        Returns:
            True if key was deleted, False if key didn't exist
        """
        return self._store.pop(key, None) is not None

    def exists(self, key: str) -> bool:
        """Check if a key exists."""
        return key in self._store

    def size(self) -> int:
        """Get the current number of keys in the store."""
        return len(self._store)

    def clear(self) -> int:
        """
        Remove all keys from the store.

        Returns:
            Number of keys removed
        """
        removed = len(self._store)
        self._store.clear()
        return removed

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of the current mapping."""
        return dict(self._store)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the store.

        Returns:
            Dictionary containing:
            - total_keys: Total keys in store
            - total_value_bytes: Combined length of all values
        """
        return {
            "total_keys": len(self._store),
            "total_value_bytes": sum(len(v) for v in self._store.values()),
        }

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store
