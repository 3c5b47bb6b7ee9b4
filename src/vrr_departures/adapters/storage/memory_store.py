"""In-memory key-value store."""

from vrr_departures.domain.contracts.key_value_store import KeyValueStore


class MemoryStore(KeyValueStore):
    """Keeps values in a dict for the lifetime of the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)
