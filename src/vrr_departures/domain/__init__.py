"""Domain layer - core models and interfaces."""

from vrr_departures.domain.models import (
    BoardConfig,
    Departure,
    DepartureSnapshot,
    StopWatch,
)
from vrr_departures.domain.ports import (
    DepartureSource,
    StopFinder,
)

__all__ = [
    "BoardConfig",
    "Departure",
    "DepartureSnapshot",
    "DepartureSource",
    "StopFinder",
    "StopWatch",
]
