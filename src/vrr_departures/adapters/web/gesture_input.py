"""Translation of raw pointer and touch events into reorder engine calls.

The browser hook sends one ``gesture`` event per raw input event::

    {"phase": "press" | "move" | "release" | "cancel",
     "modality": "pointer" | "touch",
     "surface": "grid" | "settings",
     "offset": <coordinate along the list axis>,
     "extents": [[start, end], ...]}

``extents`` are the item boxes of that surface's list along the same axis, in
list order. Pointer and touch are handled identically; the only conversion is
offset to item index.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from vrr_departures.domain.models.drag_state import Surface

if TYPE_CHECKING:
    from vrr_departures.application.services.reorder_engine import ReorderEngine

logger = logging.getLogger(__name__)


class GesturePhase(StrEnum):
    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"
    CANCEL = "cancel"


class Modality(StrEnum):
    POINTER = "pointer"
    TOUCH = "touch"


def index_at(
    offset: float, extents: Sequence[Sequence[float]], clamp: bool = False
) -> int | None:
    """Item index under ``offset``.

    Without ``clamp`` only a hit inside an item counts. With ``clamp`` an
    offset before the first item maps to 0, past the last item to the last
    index, and a gap between items to the following item.
    """
    if not extents:
        return None
    for index, (start, end) in enumerate(extents):
        if start <= offset < end:
            return index
    if not clamp:
        return None
    if offset < extents[0][0]:
        return 0
    for index, (start, _end) in enumerate(extents):
        if offset < start:
            return index
    return len(extents) - 1


def _parse_extents(raw: Any) -> list[tuple[float, float]]:
    extents = []
    if not isinstance(raw, list):
        return extents
    for item in raw:
        try:
            start, end = item
            extents.append((float(start), float(end)))
        except (TypeError, ValueError):
            return []
    return extents


class GestureTranslator:
    """Feeds raw input events into the reorder engine's four-method contract.

    While a gesture is active, events from the other modality are ignored so
    the compatibility mouse events browsers emit after touch do not interfere.
    """

    def __init__(self, engine: ReorderEngine) -> None:
        self.engine = engine
        self.active_modality: Modality | None = None

    async def handle(self, payload: dict[str, Any]) -> None:
        """Handle one raw gesture event. Malformed events are dropped."""
        try:
            phase = GesturePhase(payload.get("phase"))
            modality = Modality(payload.get("modality", Modality.POINTER))
            surface = Surface(payload.get("surface"))
        except ValueError:
            logger.debug(f"Ignoring malformed gesture event: {payload}")
            return

        if self.active_modality is not None and modality != self.active_modality:
            return

        if phase is GesturePhase.CANCEL:
            self.active_modality = None
            await self.engine.cancel_drag()
            return

        try:
            offset = float(payload.get("offset"))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.debug(f"Ignoring gesture event without offset: {payload}")
            return
        extents = _parse_extents(payload.get("extents"))

        if phase is GesturePhase.PRESS:
            index = index_at(offset, extents)
            if index is not None and await self.engine.begin_drag(surface, index):
                self.active_modality = modality
        elif phase is GesturePhase.MOVE:
            if self.active_modality is not None:
                await self.engine.drag_over(surface, index_at(offset, extents, clamp=True))
        elif phase is GesturePhase.RELEASE:
            if self.active_modality is not None:
                self.active_modality = None
                await self.engine.drop(surface, index_at(offset, extents, clamp=True))
