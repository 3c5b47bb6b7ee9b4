"""Departure snapshot domain model."""

from dataclasses import dataclass, field
from datetime import datetime

from vrr_departures.domain.models.departure import Departure
from vrr_departures.domain.models.fetch_failure import FetchFailure


@dataclass(frozen=True)
class DepartureSnapshot:
    """Most recent fetched-and-filtered departure set for one watched stop."""

    stop_id: str
    fetched_at: datetime
    departures: tuple[Departure, ...] = field(default_factory=tuple)
    stale: bool = False
    failure: FetchFailure | None = None
