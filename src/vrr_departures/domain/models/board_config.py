"""Board configuration domain model."""

from dataclasses import dataclass, field

from vrr_departures.domain.models.stop_watch import StopWatch

CURRENT_CONFIG_VERSION = 3
DEFAULT_REFRESH_INTERVAL_SECONDS = 30
DEFAULT_MAX_DEPARTURES_PER_STOP = 10
MIN_REFRESH_INTERVAL_SECONDS = 5


@dataclass(frozen=True)
class BoardConfig:
    """The ordered watch list plus global display settings.

    Position in ``stops`` is the display order on every surface.
    """

    stops: tuple[StopWatch, ...] = field(default_factory=tuple)
    refresh_interval_seconds: int = DEFAULT_REFRESH_INTERVAL_SECONDS
    max_departures_per_stop: int = DEFAULT_MAX_DEPARTURES_PER_STOP
    version: int = CURRENT_CONFIG_VERSION
