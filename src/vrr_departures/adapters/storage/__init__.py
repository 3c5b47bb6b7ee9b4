"""Key-value storage adapters for the persisted board configuration."""

from vrr_departures.adapters.storage.json_file_store import JsonFileStore
from vrr_departures.adapters.storage.memory_store import MemoryStore

__all__ = ["JsonFileStore", "MemoryStore"]
