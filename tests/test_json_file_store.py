"""Tests for the storage adapters."""

import json
from pathlib import Path

from vrr_departures.adapters.storage import JsonFileStore, MemoryStore


def test_json_store_round_trips_values(tmp_path: Path) -> None:
    """Given a new store, when setting keys, then they are persisted in one JSON object."""
    path = tmp_path / "nested" / "board.json"
    store = JsonFileStore(path)

    store.set("a", "1")
    store.set("b", "2")

    assert JsonFileStore(path).get("a") == "1"
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1", "b": "2"}


def test_json_store_delete(tmp_path: Path) -> None:
    """Given a stored key, when deleting it, then other keys survive."""
    store = JsonFileStore(tmp_path / "board.json")
    store.set("a", "1")
    store.set("b", "2")

    store.delete("a")
    store.delete("never-set")

    assert store.get("a") is None
    assert store.get("b") == "2"


def test_json_store_leaves_no_temporary_files(tmp_path: Path) -> None:
    """Given several writes, when listing the directory, then only the target file exists."""
    store = JsonFileStore(tmp_path / "board.json")
    for i in range(3):
        store.set("k", str(i))

    assert [p.name for p in tmp_path.iterdir()] == ["board.json"]


def test_json_store_ignores_corrupt_file(tmp_path: Path) -> None:
    """Given a corrupt file, when reading, then the store behaves as empty and can be rewritten."""
    path = tmp_path / "board.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path)

    assert store.get("a") is None
    store.set("a", "1")
    assert store.get("a") == "1"


def test_json_store_ignores_non_object_file(tmp_path: Path) -> None:
    """Given a file holding a JSON array, when reading, then nothing is returned."""
    path = tmp_path / "board.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert JsonFileStore(path).get("0") is None


def test_memory_store() -> None:
    """Given initial values, when mutating the memory store, then the initial dict is untouched."""
    initial = {"a": "1"}
    store = MemoryStore(initial)

    store.set("a", "2")
    store.delete("missing")

    assert store.get("a") == "2"
    assert initial == {"a": "1"}
