"""Departure source port."""

from typing import Protocol

from vrr_departures.domain.models.departure import Departure


class DepartureSource(Protocol):
    """Port for retrieving normalized departures for a stop through the relay."""

    async def get_departures(self, stop_id: str) -> list[Departure]:
        """Get departures for a stop.

        Raises:
            RelayError: The relay reported an error or could not be reached.
        """
        ...
