"""Departure fetcher: one relay request per call, filtered into a snapshot."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from vrr_departures.domain.contracts.departure_fetcher import DepartureFetcherProtocol
from vrr_departures.domain.models.departure_snapshot import DepartureSnapshot
from vrr_departures.domain.models.fetch_failure import ErrorType, FetchFailure, RelayError

if TYPE_CHECKING:
    from vrr_departures.domain.models.departure import Departure
    from vrr_departures.domain.models.stop_watch import StopWatch
    from vrr_departures.domain.ports import DepartureSource

logger = logging.getLogger(__name__)


def is_within_window(minute: int, time_from: int | None, time_to: int | None) -> bool:
    """Check a minute of day against inclusive bounds.

    Either bound may be unset. A window whose start is after its end wraps
    past midnight (e.g. 23:00-01:00).
    """
    if time_from is None and time_to is None:
        return True
    if time_from is None:
        return minute <= time_to  # type: ignore[operator]
    if time_to is None:
        return minute >= time_from
    if time_from <= time_to:
        return time_from <= minute <= time_to
    return minute >= time_from or minute <= time_to


def filter_departures(
    departures: Iterable[Departure], stop_watch: StopWatch, timezone: ZoneInfo
) -> list[Departure]:
    """Apply the stop watch's platform set and planned-time window."""
    platforms = {p.strip().casefold() for p in stop_watch.platforms}
    result = []
    for departure in departures:
        if platforms:
            platform = (departure.platform or "").strip().casefold()
            if platform not in platforms:
                continue
        if stop_watch.has_time_window:
            planned = departure.planned_time
            if planned.tzinfo is not None:
                planned = planned.astimezone(timezone)
            minute = planned.hour * 60 + planned.minute
            if not is_within_window(minute, stop_watch.time_from, stop_watch.time_to):
                continue
        result.append(departure)
    return result


def sort_departures(departures: Iterable[Departure]) -> list[Departure]:
    """Order by estimated-else-planned time, ties broken by line."""
    return sorted(departures, key=lambda d: (d.effective_time, d.line))


class DepartureFetcher(DepartureFetcherProtocol):
    """Fetches departures for one stop watch and turns them into a snapshot."""

    def __init__(
        self,
        departure_source: DepartureSource,
        timezone: str = "Europe/Berlin",
        now: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            departure_source: Source of normalized departures (the relay).
            timezone: IANA timezone the time-window filter is evaluated in.
            now: Wall clock used for ``fetched_at``; defaults to UTC now.
        """
        self.departure_source = departure_source
        self.timezone = ZoneInfo(timezone)
        self._now = now or (lambda: datetime.now(UTC))

    async def fetch(
        self, stop_watch: StopWatch, max_departures: int
    ) -> DepartureSnapshot | FetchFailure:
        """Fetch, filter, order and truncate departures for a stop watch.

        Returns a classified failure instead of raising.
        """
        try:
            departures = await self.departure_source.get_departures(stop_watch.id)
        except RelayError as e:
            logger.warning(
                f"Failed to fetch departures for {stop_watch.display_name} "
                f"(stop: {stop_watch.id}): {e.failure.error_type} {e.failure.message}"
            )
            return e.failure
        except Exception as e:
            logger.error(
                f"Unexpected error fetching departures for stop {stop_watch.id}: {e}",
                exc_info=True,
            )
            return FetchFailure(error_type=ErrorType.UNKNOWN_ERROR, message=str(e))

        filtered = filter_departures(departures, stop_watch, self.timezone)
        ordered = sort_departures(filtered)[:max_departures]
        logger.debug(
            f"Fetched {len(departures)} departures for stop {stop_watch.id}, "
            f"{len(filtered)} after filters, showing {len(ordered)}"
        )
        return DepartureSnapshot(
            stop_id=stop_watch.id,
            fetched_at=self._now(),
            departures=tuple(ordered),
        )
