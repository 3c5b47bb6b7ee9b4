"""Tests for translating raw pointer and touch events into drag calls."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from vrr_departures.adapters.web.gesture_input import GestureTranslator, index_at
from vrr_departures.domain.models import Surface

EXTENTS = [[0, 40], [50, 90], [100, 140]]


@pytest.fixture
def engine() -> MagicMock:
    engine = MagicMock()
    engine.begin_drag = AsyncMock(return_value=True)
    engine.drag_over = AsyncMock()
    engine.drop = AsyncMock(return_value=True)
    engine.cancel_drag = AsyncMock()
    return engine


def _event(phase: str, offset: float, modality: str = "pointer", surface: str = "grid") -> dict:
    return {
        "phase": phase,
        "modality": modality,
        "surface": surface,
        "offset": offset,
        "extents": EXTENTS,
    }


@pytest.mark.parametrize(
    ("offset", "clamp", "expected"),
    [
        (0, False, 0),
        (39.9, False, 0),
        (40, False, None),
        (60, False, 1),
        (139, False, 2),
        (-10, False, None),
        (-10, True, 0),
        (45, True, 1),
        (500, True, 2),
    ],
)
def test_index_at(offset: float, clamp: bool, expected: int | None) -> None:
    """Given item extents, when resolving an offset, then the item index under it is returned."""
    assert index_at(offset, EXTENTS, clamp=clamp) == expected


def test_index_at_empty_list() -> None:
    """Given no items, when resolving an offset, then there is no index."""
    assert index_at(10, [], clamp=True) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("modality", ["pointer", "touch"])
async def test_pointer_and_touch_map_to_the_same_calls(engine: MagicMock, modality: str) -> None:
    """Given a press-move-release sequence, when translated, then both modalities call the engine identically."""
    translator = GestureTranslator(engine)

    await translator.handle(_event("press", 10, modality, "settings"))
    await translator.handle(_event("move", 70, modality, "settings"))
    await translator.handle(_event("release", 120, modality, "settings"))

    engine.begin_drag.assert_awaited_once_with(Surface.SETTINGS, 0)
    engine.drag_over.assert_awaited_once_with(Surface.SETTINGS, 1)
    engine.drop.assert_awaited_once_with(Surface.SETTINGS, 2)
    assert translator.active_modality is None


@pytest.mark.asyncio
async def test_press_outside_items_starts_nothing(engine: MagicMock) -> None:
    """Given a press between items, when translated, then no drag starts and moves are ignored."""
    translator = GestureTranslator(engine)

    await translator.handle(_event("press", 45))
    await translator.handle(_event("move", 60))
    await translator.handle(_event("release", 60))

    engine.begin_drag.assert_not_called()
    engine.drag_over.assert_not_called()
    engine.drop.assert_not_called()


@pytest.mark.asyncio
async def test_other_modality_is_ignored_during_gesture(engine: MagicMock) -> None:
    """Given a touch gesture, when compatibility pointer events arrive, then they are ignored."""
    translator = GestureTranslator(engine)

    await translator.handle(_event("press", 10, "touch"))
    await translator.handle(_event("release", 60, "pointer"))
    await translator.handle(_event("release", 60, "touch"))

    engine.drop.assert_awaited_once_with(Surface.GRID, 1)


@pytest.mark.asyncio
async def test_cancel_discards_gesture(engine: MagicMock) -> None:
    """Given an active gesture, when cancelled, then the engine cancels and later releases are ignored."""
    translator = GestureTranslator(engine)

    await translator.handle(_event("press", 10))
    await translator.handle({"phase": "cancel", "modality": "pointer", "surface": "grid"})
    await translator.handle(_event("release", 120))

    engine.cancel_drag.assert_awaited_once()
    engine.drop.assert_not_called()


@pytest.mark.asyncio
async def test_malformed_events_are_dropped(engine: MagicMock) -> None:
    """Given events with unknown phase, surface or missing offset, when handled, then nothing is called."""
    translator = GestureTranslator(engine)

    await translator.handle({"phase": "wiggle", "surface": "grid", "offset": 1})
    await translator.handle({"phase": "press", "surface": "sidebar", "offset": 1})
    await translator.handle({"phase": "press", "surface": "grid"})

    engine.begin_drag.assert_not_called()
