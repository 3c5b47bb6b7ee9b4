"""Reorder engine: drag gestures on either surface become list-position moves."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from vrr_departures.application.services.config_store import ConfigValidationError
from vrr_departures.domain.models.drag_state import DragState, Surface

if TYPE_CHECKING:
    from vrr_departures.application.services.config_store import ConfigStore
    from vrr_departures.application.services.render_coordinator import RenderCoordinator

logger = logging.getLogger(__name__)


class ReorderEngine:
    """Holds the pending drag gesture and applies drops to the shared order.

    The same four methods serve the grid and the settings surface, for both
    pointer and touch input.
    """

    def __init__(self, config_store: ConfigStore, render_coordinator: RenderCoordinator) -> None:
        """Initialize the reorder engine.

        Args:
            config_store: Owner of the single shared order.
            render_coordinator: Re-renders every surface after a change.
        """
        self.config_store = config_store
        self.render_coordinator = render_coordinator
        self._drag: DragState | None = None

    @property
    def drag_state(self) -> DragState | None:
        return self._drag

    def _is_valid_index(self, index: int | None) -> bool:
        return index is not None and 0 <= index < len(self.config_store.current.stops)

    async def begin_drag(self, surface: Surface, source_index: int) -> bool:
        """Mark the item at ``source_index`` on ``surface`` as being moved."""
        if not self._is_valid_index(source_index):
            logger.debug(f"Ignoring drag start at invalid index {source_index} on {surface}")
            return False
        self._drag = DragState(surface=surface, source_index=source_index)
        await self.render_coordinator.request_render()
        return True

    async def drag_over(self, surface: Surface, target_index: int | None) -> None:
        """Record the current candidate target. Advisory until drop."""
        drag = self._drag
        if drag is None or drag.surface != surface:
            return
        if target_index is not None and not self._is_valid_index(target_index):
            return
        if drag.hover_index == target_index:
            return
        self._drag = replace(drag, hover_index=target_index)
        await self.render_coordinator.request_render()

    async def drop(self, surface: Surface, target_index: int | None = None) -> bool:
        """Apply the pending gesture to the shared order and re-render all surfaces.

        Without an explicit target the last hovered position is used. Returns
        True when the order changed.
        """
        drag = self._drag
        if drag is None:
            return False
        self._drag = None
        if drag.surface != surface:
            logger.debug(f"Drop on {surface} does not match drag started on {drag.surface}")
            await self.render_coordinator.request_render()
            return False

        target = target_index if target_index is not None else drag.hover_index
        moved = target is not None and self.move(drag.source_index, target)
        await self.render_coordinator.config_changed()
        return moved

    async def cancel_drag(self) -> None:
        """Discard the pending gesture without touching the order."""
        if self._drag is None:
            return
        self._drag = None
        await self.render_coordinator.request_render()

    def discard_drag(self) -> bool:
        """Forget the pending gesture without re-rendering.

        Used when the list length changed under the gesture, so its source
        position may point at another entry. Returns True if one was pending.
        """
        if self._drag is None:
            return False
        logger.debug(f"Discarding drag from position {self._drag.source_index}: list changed")
        self._drag = None
        return True

    def move(self, from_index: int, to_index: int) -> bool:
        """Reorder and persist in one step. Invalid indices are rejected silently."""
        if from_index == to_index and self._is_valid_index(from_index):
            return False
        try:
            self.config_store.move(from_index, to_index)
        except ConfigValidationError as e:
            logger.debug(f"Rejected reorder: {e}")
            return False
        logger.info(f"Moved stop from position {from_index} to {to_index}")
        return True
