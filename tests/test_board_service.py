"""Tests for the operations the settings and grid surfaces call."""

from unittest.mock import MagicMock

import pytest

from tests.fakes import RecordingBroadcaster, make_departure, make_snapshot
from vrr_departures.application.services import (
    BoardService,
    ConfigStore,
    ConfigValidationError,
    RenderCoordinator,
    ReorderEngine,
)
from vrr_departures.domain.models import Station, StopWatch, Surface


@pytest.mark.asyncio
async def test_add_stop_persists_resyncs_and_rerenders(
    service: BoardService, config_store: ConfigStore, broadcaster: RecordingBroadcaster
) -> None:
    """Given a new stop, when added, then it is appended, gets a timer and surfaces re-render."""
    await service.add_stop("20018235", "", label="Work", platforms=["4"], time_from=420)

    added = config_store.current.stops[-1]
    assert added == StopWatch(
        id="20018235", name="20018235", label="Work", platforms=frozenset({"4"}), time_from=420
    )
    assert service.scheduler.timers[added.entry_id].watch == added
    assert broadcaster.topics[-1] == "board:updates"


@pytest.mark.asyncio
async def test_edit_changes_identity_and_rebuilds_timers(
    service: BoardService, config_store: ConfigStore
) -> None:
    """Given an edited stop, when saved, then its timer is replaced by one for the new settings."""
    old = config_store.current.stops[0]
    old_timer = service.scheduler.timers[old.entry_id]

    await service.update_stop(0, label="Home")

    new = config_store.current.stops[0]
    assert new.label == "Home"
    assert new.entry_id == old.entry_id
    assert service.scheduler.timers[new.entry_id].watch == new
    assert service.scheduler.timers[new.entry_id] is not old_timer


@pytest.mark.asyncio
async def test_remove_stop_drops_its_timer(
    service: BoardService, config_store: ConfigStore, stops: tuple[StopWatch, ...]
) -> None:
    """Given a watched stop, when removed, then it disappears from the list and the timers."""
    await service.remove_stop(1)

    assert stops[1] not in config_store.current.stops
    assert stops[1].entry_id not in service.scheduler.timers


@pytest.mark.asyncio
async def test_invalid_settings_raise_without_rerender(
    service: BoardService, broadcaster: RecordingBroadcaster
) -> None:
    """Given an out-of-range interval, when updating settings, then a validation error is raised."""
    with pytest.raises(ConfigValidationError):
        await service.update_settings(refresh_interval_seconds=1)

    assert broadcaster.topics == []


@pytest.mark.asyncio
async def test_short_search_query_does_not_hit_the_finder(
    service: BoardService, stop_finder: MagicMock
) -> None:
    """Given a query shorter than three characters, when searching, then no upstream call is made."""
    assert await service.search_stops("Es") == []
    stop_finder.search_stops.assert_not_called()

    results = await service.search_stops(" Essen ")

    assert results == [Station(id="20009289", name="Essen Hbf")]
    stop_finder.search_stops.assert_awaited_once_with("Essen")


def test_current_view_includes_pending_drag(service: BoardService) -> None:
    """Given no gesture, when reading the view, then nothing is marked as dragging."""
    view = service.current_view()

    assert view.dragging is False
    assert len(view.grid) == len(view.settings)


@pytest.mark.asyncio
async def test_label_edit_keeps_panel_departures(
    service: BoardService, coordinator: RenderCoordinator, stops: tuple[StopWatch, ...]
) -> None:
    """Given a panel showing departures, when only its label is edited, then the departures stay visible."""
    snapshot = make_snapshot(stops[0], make_departure("U11", 8, 15))
    await coordinator.snapshot_replaced(stops[0], snapshot)

    await service.update_stop(0, label="Home")

    panel = service.current_view().grid[0]
    assert panel.title == "Home"
    assert panel.status == "ok"
    assert [row.line for row in panel.rows] == ["U11"]


@pytest.mark.asyncio
async def test_changing_the_stop_id_discards_old_departures(
    service: BoardService, coordinator: RenderCoordinator, stops: tuple[StopWatch, ...]
) -> None:
    """Given a panel with departures, when it is pointed at another stop, then the old rows are dropped."""
    snapshot = make_snapshot(stops[1], make_departure("U11", 8, 15))
    await coordinator.snapshot_replaced(stops[1], snapshot)

    await service.update_stop(1, id="20018235")

    assert service.current_view().grid[1].status == "loading"


@pytest.mark.asyncio
async def test_adding_a_stop_cancels_a_pending_drag(
    service: BoardService, engine: ReorderEngine
) -> None:
    """Given a drag in progress, when another client adds a stop, then the gesture is dropped."""
    await engine.begin_drag(Surface.GRID, 2)

    await service.add_stop("20018235", "Bochum Hbf")

    assert engine.drag_state is None
    assert await engine.drop(Surface.GRID, 0) is False


@pytest.mark.asyncio
async def test_removing_a_stop_cancels_a_pending_drag(
    service: BoardService,
    engine: ReorderEngine,
    config_store: ConfigStore,
    stops: tuple[StopWatch, ...],
) -> None:
    """Given a drag in progress, when a stop is removed, then a later drop moves nothing."""
    await engine.begin_drag(Surface.SETTINGS, 3)
    await engine.drag_over(Surface.SETTINGS, 0)

    await service.remove_stop(0)

    assert engine.drag_state is None
    assert await engine.drop(Surface.SETTINGS) is False
    assert config_store.current.stops == stops[1:]


@pytest.mark.asyncio
async def test_label_edit_keeps_a_pending_drag(service: BoardService, engine: ReorderEngine) -> None:
    """Given a drag in progress, when a stop is only edited, then the gesture survives."""
    await engine.begin_drag(Surface.GRID, 1)

    await service.update_stop(0, label="Home")

    assert engine.drag_state is not None
    assert engine.drag_state.source_index == 1
