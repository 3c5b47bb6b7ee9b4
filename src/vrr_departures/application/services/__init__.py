"""Application services."""

from vrr_departures.application.services.board_service import BoardService
from vrr_departures.application.services.config_store import (
    DEFAULT_STORAGE_KEY,
    ConfigStore,
    ConfigValidationError,
    reorder,
)
from vrr_departures.application.services.departure_fetcher import DepartureFetcher
from vrr_departures.application.services.refresh_scheduler import (
    MonotonicClock,
    RefreshScheduler,
)
from vrr_departures.application.services.render_coordinator import (
    BOARD_TOPIC,
    BoardView,
    RenderCoordinator,
)
from vrr_departures.application.services.reorder_engine import ReorderEngine

__all__ = [
    "BOARD_TOPIC",
    "DEFAULT_STORAGE_KEY",
    "BoardService",
    "BoardView",
    "ConfigStore",
    "ConfigValidationError",
    "DepartureFetcher",
    "MonotonicClock",
    "RefreshScheduler",
    "RenderCoordinator",
    "ReorderEngine",
    "reorder",
]
