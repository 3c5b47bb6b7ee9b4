"""Stop finder port."""

from typing import Protocol

from vrr_departures.domain.models.station import Station


class StopFinder(Protocol):
    """Port for searching stops by name."""

    async def search_stops(self, query: str) -> list[Station]:
        """Search for stops matching the query."""
        ...
