"""Render coordinator: projects config, snapshots and drag state onto both surfaces."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from vrr_departures.application.services.departure_formatter import DepartureFormatter
from vrr_departures.domain.models.departure_snapshot import DepartureSnapshot
from vrr_departures.domain.models.drag_state import DragState, Surface
from vrr_departures.domain.models.fetch_failure import FetchFailure

if TYPE_CHECKING:
    from vrr_departures.application.services.config_store import ConfigStore
    from vrr_departures.domain.contracts.state_broadcaster import StateBroadcasterProtocol
    from vrr_departures.domain.models.board_config import BoardConfig
    from vrr_departures.domain.models.stop_watch import StopWatch

logger = logging.getLogger(__name__)

BOARD_TOPIC = "board:updates"


@dataclass(frozen=True)
class DepartureRow:
    """One departure line on the grid surface."""

    line: str
    destination: str
    time: str
    countdown: str
    delay: str
    platform: str
    cancelled: bool


@dataclass(frozen=True)
class GridPanel:
    """One stop panel on the grid surface."""

    index: int
    stop_id: str
    title: str
    rows: tuple[DepartureRow, ...]
    status: str  # "loading", "ok", "stale" or "error"
    error: str
    age: str
    drag_class: str


@dataclass(frozen=True)
class SettingsRow:
    """One editable stop watch on the settings surface."""

    index: int
    stop_id: str
    name: str
    label: str
    platforms: str
    time_from: str
    time_to: str
    drag_class: str


@dataclass(frozen=True)
class BoardView:
    """Visible state of both surfaces."""

    grid: tuple[GridPanel, ...]
    settings: tuple[SettingsRow, ...]
    refresh_interval_seconds: int
    max_departures_per_stop: int
    dragging: bool


def drag_feedback(index: int, surface: Surface, drag: DragState | None) -> str:
    """CSS classes for an item, derived only from the pending gesture."""
    if drag is None or drag.surface != surface:
        return ""
    if index == drag.source_index:
        return "dragging"
    if index == drag.hover_index:
        return "drop-target"
    return ""


def _describe_failure(failure: FetchFailure) -> str:
    if failure.status is not None:
        return f"{failure.error_type}: {failure.message} ({failure.status})"
    return f"{failure.error_type}: {failure.message}"


def _grid_panel(
    index: int,
    watch: StopWatch,
    snapshot: DepartureSnapshot | None,
    failure: FetchFailure | None,
    drag: DragState | None,
    now: datetime,
    formatter: DepartureFormatter,
) -> GridPanel:
    rows: tuple[DepartureRow, ...] = ()
    age = ""
    error = ""
    if snapshot is not None:
        rows = tuple(
            DepartureRow(
                line=d.line,
                destination=d.destination,
                time=formatter.format_clock_time(d.effective_time),
                countdown=formatter.format_countdown(d, now),
                delay=f"+{d.delay_minutes}" if d.delay_minutes else "",
                platform=d.platform or "",
                cancelled=d.is_cancelled,
            )
            for d in snapshot.departures
        )
        age = formatter.format_age(snapshot.fetched_at, now)
        status = "stale" if snapshot.stale else "ok"
        if snapshot.stale and snapshot.failure is not None:
            error = _describe_failure(snapshot.failure)
    elif failure is not None:
        status = "error"
        error = _describe_failure(failure)
    else:
        status = "loading"

    return GridPanel(
        index=index,
        stop_id=watch.id,
        title=watch.display_name,
        rows=rows,
        status=status,
        error=error,
        age=age,
        drag_class=drag_feedback(index, Surface.GRID, drag),
    )


def render_board(
    config: BoardConfig,
    snapshots: Mapping[str, DepartureSnapshot],
    failures: Mapping[str, FetchFailure],
    drag: DragState | None,
    now: datetime,
    formatter: DepartureFormatter,
) -> BoardView:
    """Pure projection of the board state onto the grid and settings surfaces.

    ``snapshots`` and ``failures`` are keyed by ``StopWatch.entry_id``.
    """
    grid = tuple(
        _grid_panel(
            index,
            watch,
            snapshots.get(watch.entry_id),
            failures.get(watch.entry_id),
            drag,
            now,
            formatter,
        )
        for index, watch in enumerate(config.stops)
    )
    settings = tuple(
        SettingsRow(
            index=index,
            stop_id=watch.id,
            name=watch.name,
            label=watch.label or "",
            platforms=", ".join(sorted(watch.platforms)),
            time_from=formatter.format_minute_of_day(watch.time_from),
            time_to=formatter.format_minute_of_day(watch.time_to),
            drag_class=drag_feedback(index, Surface.SETTINGS, drag),
        )
        for index, watch in enumerate(config.stops)
    )
    return BoardView(
        grid=grid,
        settings=settings,
        refresh_interval_seconds=config.refresh_interval_seconds,
        max_departures_per_stop=config.max_departures_per_stop,
        dragging=drag is not None,
    )


class RenderCoordinator:
    """Keeps the latest per-stop results and triggers re-renders of every surface."""

    def __init__(
        self,
        config_store: ConfigStore,
        state_broadcaster: StateBroadcasterProtocol,
        broadcast_topic: str = BOARD_TOPIC,
        timezone: str = "Europe/Berlin",
    ) -> None:
        """Initialize the render coordinator.

        Args:
            config_store: Source of the current watch list.
            state_broadcaster: Notifies connected surfaces to re-render.
            broadcast_topic: The pub/sub topic surfaces subscribe to.
            timezone: IANA timezone for displayed clock times.
        """
        self.config_store = config_store
        self.state_broadcaster = state_broadcaster
        self.broadcast_topic = broadcast_topic
        self.formatter = DepartureFormatter(timezone)
        # Keyed by StopWatch.entry_id
        self.snapshots: dict[str, DepartureSnapshot] = {}
        self.failures: dict[str, FetchFailure] = {}

    def accept_result(self, watch: StopWatch, result: DepartureSnapshot | FetchFailure) -> bool:
        """Store a fetch result for a list entry that is still on the list.

        A successful snapshot replaces the previous one wholesale. A failure
        keeps the previous snapshot and flags it stale. Results for entries
        removed since the fetch started, or whose stop or filters were edited
        meanwhile, are discarded. Display-only edits keep the entry's data.
        """
        current = next(
            (w for w in self.config_store.current.stops if w.entry_id == watch.entry_id), None
        )
        if current is None:
            logger.debug(f"Discarding late result for removed stop {watch.id}")
            return False
        if current.query != watch.query:
            logger.debug(f"Discarding result fetched with outdated settings for stop {watch.id}")
            return False

        key = watch.entry_id
        if isinstance(result, DepartureSnapshot):
            self.snapshots[key] = result
            self.failures.pop(key, None)
            return True

        self.failures[key] = result
        previous = self.snapshots.get(key)
        if previous is not None:
            self.snapshots[key] = replace(previous, stale=True, failure=result)
            logger.info(
                f"Keeping stale departures for {current.display_name} ({result.error_type})"
            )
        return True

    async def snapshot_replaced(
        self, watch: StopWatch, result: DepartureSnapshot | FetchFailure
    ) -> None:
        """Accept a fetch result and re-render if it was kept."""
        if self.accept_result(watch, result):
            await self.request_render()

    def prune(self, config: BoardConfig) -> None:
        """Drop results of list entries no longer on the list or now pointing at another stop."""
        active = {w.entry_id: w for w in config.stops}
        for key in [
            k for k, s in self.snapshots.items() if k not in active or s.stop_id != active[k].id
        ]:
            del self.snapshots[key]
        for key in [k for k in self.failures if k not in active]:
            del self.failures[key]

    async def config_changed(self) -> None:
        """Prune removed stops and re-render every surface."""
        self.prune(self.config_store.current)
        await self.request_render()

    async def request_render(self) -> None:
        """Ask every connected surface to re-render."""
        await self.state_broadcaster.broadcast_update(self.broadcast_topic)

    def view(self, drag: DragState | None, now: datetime | None = None) -> BoardView:
        """Current visible state of both surfaces."""
        return render_board(
            self.config_store.current,
            self.snapshots,
            self.failures,
            drag,
            now or datetime.now(UTC),
            self.formatter,
        )
