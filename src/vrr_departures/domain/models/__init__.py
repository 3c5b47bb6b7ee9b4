"""Domain models for the VRR departure board."""

from vrr_departures.domain.models.board_config import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_MAX_DEPARTURES_PER_STOP,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    MIN_REFRESH_INTERVAL_SECONDS,
    BoardConfig,
)
from vrr_departures.domain.models.board_config_record import BoardConfigRecord, StopWatchRecord
from vrr_departures.domain.models.departure import Departure
from vrr_departures.domain.models.departure_snapshot import DepartureSnapshot
from vrr_departures.domain.models.drag_state import DragState, Surface
from vrr_departures.domain.models.error_details import ErrorDetails, ErrorResponse
from vrr_departures.domain.models.fetch_failure import ErrorType, FetchFailure, RelayError
from vrr_departures.domain.models.station import Station
from vrr_departures.domain.models.stop_watch import MINUTES_PER_DAY, StopWatch

__all__ = [
    "CURRENT_CONFIG_VERSION",
    "DEFAULT_MAX_DEPARTURES_PER_STOP",
    "DEFAULT_REFRESH_INTERVAL_SECONDS",
    "MINUTES_PER_DAY",
    "MIN_REFRESH_INTERVAL_SECONDS",
    "BoardConfig",
    "BoardConfigRecord",
    "Departure",
    "DepartureSnapshot",
    "DragState",
    "ErrorDetails",
    "ErrorResponse",
    "ErrorType",
    "FetchFailure",
    "RelayError",
    "Station",
    "StopWatch",
    "StopWatchRecord",
    "Surface",
]
