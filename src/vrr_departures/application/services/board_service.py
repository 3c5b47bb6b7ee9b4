"""Board service: the operations the surfaces call."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from vrr_departures.domain.models.stop_watch import StopWatch

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from vrr_departures.application.services.config_store import ConfigStore
    from vrr_departures.application.services.refresh_scheduler import RefreshScheduler
    from vrr_departures.application.services.render_coordinator import (
        BoardView,
        RenderCoordinator,
    )
    from vrr_departures.application.services.reorder_engine import ReorderEngine
    from vrr_departures.domain.models.station import Station
    from vrr_departures.domain.ports import StopFinder

logger = logging.getLogger(__name__)

MIN_SEARCH_QUERY_LENGTH = 3


class BoardService:
    """Coordinates config mutations, timer resync and re-rendering."""

    def __init__(
        self,
        config_store: ConfigStore,
        reorder_engine: ReorderEngine,
        render_coordinator: RenderCoordinator,
        scheduler: RefreshScheduler,
        stop_finder: StopFinder | None = None,
    ) -> None:
        self.config_store = config_store
        self.reorder_engine = reorder_engine
        self.render_coordinator = render_coordinator
        self.scheduler = scheduler
        self.stop_finder = stop_finder

    def current_view(self, now: datetime | None = None) -> BoardView:
        """Visible state of both surfaces, including any pending drag."""
        return self.render_coordinator.view(self.reorder_engine.drag_state, now)

    async def add_stop(
        self,
        stop_id: str,
        name: str = "",
        label: str | None = None,
        platforms: Iterable[str] = (),
        time_from: int | None = None,
        time_to: int | None = None,
    ) -> None:
        """Append a stop watch to the list."""
        watch = StopWatch(
            id=stop_id.strip(),
            name=name.strip() or stop_id.strip(),
            label=label or None,
            platforms=frozenset(platforms),
            time_from=time_from,
            time_to=time_to,
        )
        count = len(self.config_store.current.stops)
        self.config_store.add_stop(watch)
        logger.info(f"Added stop {watch.display_name} ({watch.id})")
        await self._after_mutation(count)

    async def remove_stop(self, index: int) -> None:
        """Remove the stop watch at a position."""
        count = len(self.config_store.current.stops)
        self.config_store.remove_stop(index)
        logger.info(f"Removed stop at position {index}")
        await self._after_mutation(count)

    async def update_stop(self, index: int, **changes: Any) -> None:
        """Edit the stop watch at a position."""
        self.config_store.update_stop(index, **changes)
        logger.info(f"Updated stop at position {index}: {sorted(changes)}")
        await self._after_mutation()

    async def update_settings(
        self,
        refresh_interval_seconds: int | None = None,
        max_departures_per_stop: int | None = None,
    ) -> None:
        """Change the global display settings."""
        self.config_store.update_settings(refresh_interval_seconds, max_departures_per_stop)
        logger.info(
            f"Updated settings: refresh={self.config_store.current.refresh_interval_seconds}s, "
            f"max departures={self.config_store.current.max_departures_per_stop}"
        )
        await self._after_mutation()

    async def reset(self) -> None:
        """Restore the built-in default configuration."""
        self.config_store.reset()
        self.reorder_engine.discard_drag()
        await self._after_mutation()

    async def search_stops(self, query: str) -> list[Station]:
        """Search the upstream stop finder.

        Raises:
            RelayError: If the relay reports a failure.
        """
        query = query.strip()
        if self.stop_finder is None or len(query) < MIN_SEARCH_QUERY_LENGTH:
            return []
        return await self.stop_finder.search_stops(query)

    async def _after_mutation(self, previous_count: int | None = None) -> None:
        if previous_count is not None and previous_count != len(self.config_store.current.stops):
            self.reorder_engine.discard_drag()
        self.scheduler.sync()
        await self.render_coordinator.config_changed()
