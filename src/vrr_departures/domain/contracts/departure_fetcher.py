"""Protocol for fetching departures for one watched stop."""

from typing import Protocol

from vrr_departures.domain.models.departure_snapshot import DepartureSnapshot
from vrr_departures.domain.models.fetch_failure import FetchFailure
from vrr_departures.domain.models.stop_watch import StopWatch


class DepartureFetcherProtocol(Protocol):
    """Fetches, filters and truncates departures for a single stop watch."""

    async def fetch(
        self, stop_watch: StopWatch, max_departures: int
    ) -> DepartureSnapshot | FetchFailure:
        """Return a fresh snapshot, or a classified failure. Never raises."""
        ...
