"""Store interface implemented by each platform backend."""

from __future__ import annotations

from abc import ABC, abstractmethod


class PersistentStore(ABC):
    """Abstract persistent variable store.

    Each call opens the backing store, acts on it and releases it; no handle
    is held between calls.
    """

    name: str = "store"
    # Value a fresh PATH entry starts from so it extends the inherited PATH
    inherit_path: str = ""

    @abstractmethod
    def read_entry(self, key: str) -> str | None:
        """Return the persisted value for *key*, or None if absent."""

    @abstractmethod
    def write_entry(self, key: str, value: str) -> None:
        """Persist *value* for *key*; an empty value removes the entry."""

    @abstractmethod
    def location(self) -> str:
        """Describe where entries are persisted."""
