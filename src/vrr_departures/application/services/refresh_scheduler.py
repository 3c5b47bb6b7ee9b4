"""Refresh scheduler: one recurring timer per watched stop, at most one fetch in flight."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from vrr_departures.domain.contracts.clock import Clock

if TYPE_CHECKING:
    from vrr_departures.application.services.config_store import ConfigStore
    from vrr_departures.application.services.render_coordinator import RenderCoordinator
    from vrr_departures.domain.contracts.departure_fetcher import DepartureFetcherProtocol
    from vrr_departures.domain.models.stop_watch import StopWatch

logger = logging.getLogger(__name__)


class MonotonicClock(Clock):
    """Real time source backed by the event loop."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


@dataclass
class StopTimer:
    """Timer state for one list entry."""

    watch: StopWatch
    next_fire_at: float
    in_flight: asyncio.Task | None = None

    @property
    def busy(self) -> bool:
        return self.in_flight is not None and not self.in_flight.done()


class RefreshScheduler:
    """Drives recurring departure fetches for every stop on the watch list."""

    def __init__(
        self,
        config_store: ConfigStore,
        fetcher: DepartureFetcherProtocol,
        render_coordinator: RenderCoordinator,
        clock: Clock | None = None,
        stagger_seconds: float = 0.5,
        resolution_seconds: float = 0.25,
    ) -> None:
        """Initialize the scheduler.

        Args:
            config_store: Source of the watch list and refresh interval.
            fetcher: Fetches one stop watch.
            render_coordinator: Receives every fetch result.
            clock: Time source; tests inject a manual clock.
            stagger_seconds: Offset between the first fires of consecutive stops.
            resolution_seconds: How often the run loop checks for due timers.
        """
        self.config_store = config_store
        self.fetcher = fetcher
        self.render_coordinator = render_coordinator
        self.clock = clock or MonotonicClock()
        self.stagger_seconds = stagger_seconds
        self.resolution_seconds = resolution_seconds
        self.timers: dict[str, StopTimer] = {}  # Keyed by StopWatch.entry_id
        self.skipped_ticks = 0
        self._task: asyncio.Task | None = None

    def sync(self) -> bool:
        """Match the timer set to the current watch list.

        The whole set is torn down and rebuilt when a stop was added, removed
        or edited. A pure reorder keeps every timer. Fetches already in flight
        are never cancelled; an entry that survives the rebuild keeps its
        fetch so the one-in-flight bound still holds. Returns True when the
        set was rebuilt.
        """
        stops = self.config_store.current.stops
        wanted = {watch.entry_id: watch for watch in stops}
        if wanted == {key: timer.watch for key, timer in self.timers.items()}:
            return False

        now = self.clock.monotonic()
        old_timers = self.timers
        self.timers = {}
        for position, watch in enumerate(stops):
            previous = old_timers.get(watch.entry_id)
            self.timers[watch.entry_id] = StopTimer(
                watch=watch,
                next_fire_at=now + position * self.stagger_seconds,
                in_flight=previous.in_flight if previous is not None else None,
            )
        logger.info(f"Rebuilt refresh timers for {len(self.timers)} stop(s)")
        return True

    def tick(self, now: float | None = None) -> int:
        """Fire every due timer. Returns the number of fetches started.

        A due timer whose previous fetch is still running skips this tick;
        nothing is queued. The next fire time uses the interval configured at
        the moment the timer fires.
        """
        if now is None:
            now = self.clock.monotonic()
        interval = self.config_store.current.refresh_interval_seconds
        started = 0
        for timer in list(self.timers.values()):
            if now < timer.next_fire_at:
                continue
            next_fire_at = timer.next_fire_at + interval
            timer.next_fire_at = next_fire_at if next_fire_at > now else now + interval
            if timer.busy:
                self.skipped_ticks += 1
                logger.debug(f"Skipping tick for stop {timer.watch.id}: fetch still in flight")
                continue
            timer.in_flight = asyncio.create_task(self._fetch(timer.watch))
            started += 1
        return started

    def in_flight_count(self) -> int:
        """Number of fetches currently outstanding across all timers."""
        return sum(1 for timer in self.timers.values() if timer.busy)

    async def _fetch(self, watch: StopWatch) -> None:
        try:
            result = await self.fetcher.fetch(
                watch, self.config_store.current.max_departures_per_stop
            )
            await self.render_coordinator.snapshot_replaced(watch, result)
        except Exception as e:
            # Log error but keep the timer alive - next tick retries
            logger.error(f"Refresh of stop {watch.id} failed: {e}", exc_info=True)

    async def start(self) -> None:
        """Start the scheduler loop."""
        if self._task is not None and not self._task.done():
            logger.warning("Refresh scheduler already running")
            return
        self.sync()
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Started refresh scheduler")

    async def stop(self) -> None:
        """Stop the scheduler loop and any outstanding fetches."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Refresh scheduler cancelled")
        pending = [t.in_flight for t in self.timers.values() if t.busy]
        for task in pending:
            task.cancel()  # type: ignore[union-attr]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.info("Stopped refresh scheduler")

    async def _run_loop(self) -> None:
        """Main scheduling loop."""
        try:
            while True:
                self.tick()
                await self.clock.sleep(self.resolution_seconds)
        except asyncio.CancelledError:
            logger.info("Refresh scheduler loop cancelled")
            raise
