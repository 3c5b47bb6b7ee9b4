"""Protocol for whole-value persistence."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Persists string values under string keys with whole-value set/get semantics.

    A reader never observes a partially written value.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store the value, replacing any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Remove the key if present."""
        ...
