"""Shared fixtures for the board tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.fakes import ManualClock, RecordingBroadcaster
from vrr_departures.adapters.storage import MemoryStore
from vrr_departures.application.services import (
    BoardService,
    ConfigStore,
    RefreshScheduler,
    RenderCoordinator,
    ReorderEngine,
)
from vrr_departures.domain.models import BoardConfig, Station, StopWatch


@pytest.fixture
def stops() -> tuple[StopWatch, ...]:
    """Four distinct stop watches, including the same stop id twice."""
    return (
        StopWatch(id="20009289", name="Essen Hbf"),
        StopWatch(id="20009161", name="Essen Berliner Platz"),
        StopWatch(id="20009289", name="Essen Hbf", platforms=frozenset({"1"})),
        StopWatch(id="20018235", name="Bochum Hbf", label="Bochum"),
    )


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def config_store(memory_store: MemoryStore, stops: tuple[StopWatch, ...]) -> ConfigStore:
    store = ConfigStore(memory_store)
    store.commit(BoardConfig(stops=stops))
    return store


@pytest.fixture
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture
def coordinator(config_store: ConfigStore, broadcaster: RecordingBroadcaster) -> RenderCoordinator:
    return RenderCoordinator(config_store, broadcaster)


@pytest.fixture
def engine(config_store: ConfigStore, coordinator: RenderCoordinator) -> ReorderEngine:
    return ReorderEngine(config_store, coordinator)


@pytest.fixture
def stop_finder() -> MagicMock:
    finder = MagicMock()
    finder.search_stops = AsyncMock(return_value=[Station(id="20009289", name="Essen Hbf")])
    return finder


@pytest.fixture
def service(
    config_store: ConfigStore,
    coordinator: RenderCoordinator,
    engine: ReorderEngine,
    stop_finder: MagicMock,
) -> BoardService:
    """Board service whose scheduler never fires on its own."""
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock()
    scheduler = RefreshScheduler(config_store, fetcher, coordinator, clock=ManualClock())
    scheduler.sync()
    return BoardService(config_store, engine, coordinator, scheduler, stop_finder)
