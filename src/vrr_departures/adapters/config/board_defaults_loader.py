"""Loads the built-in default board, optionally seeded from a TOML file."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from vrr_departures.adapters.config.app_config import AppConfig
from vrr_departures.domain.models.board_config import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_MAX_DEPARTURES_PER_STOP,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    BoardConfig,
)
from vrr_departures.domain.models.board_config_record import BoardConfigRecord

logger = logging.getLogger(__name__)


def _parse_time_bound(value: Any) -> int | None:
    """Accept minutes of day or an 'HH:MM' string."""
    if value is None or isinstance(value, int):
        return value
    hours, _, minutes = str(value).partition(":")
    return int(hours) * 60 + int(minutes or 0)


class BoardDefaultsLoader:
    """Builds the default BoardConfig used when nothing is persisted.

    The TOML file mirrors the persisted record::

        [display]
        refresh_interval_seconds = 30
        max_departures_per_stop = 8

        [[stops]]
        id = "20009289"
        name = "Essen Hbf"
        platforms = ["1", "2"]
        time_from = "06:00"
    """

    @staticmethod
    def load(config: AppConfig) -> BoardConfig:
        """Load the default board from ``config.board_defaults_file`` if set.

        Raises:
            FileNotFoundError: If the configured file does not exist.
            ValueError: If the file content is not a valid board.
        """
        if not config.board_defaults_file:
            return BoardConfig()

        path = Path(config.board_defaults_file)
        if not path.exists():
            raise FileNotFoundError(f"Board defaults file not found: {path}")

        with open(path, "rb") as f:
            toml_data = tomllib.load(f)

        display = toml_data.get("display", {})
        stops = toml_data.get("stops", [])
        if not isinstance(stops, list):
            raise ValueError("TOML config 'stops' must be a list")

        raw = {
            "version": CURRENT_CONFIG_VERSION,
            "refreshIntervalSeconds": display.get(
                "refresh_interval_seconds", DEFAULT_REFRESH_INTERVAL_SECONDS
            ),
            "maxDeparturesPerStop": display.get(
                "max_departures_per_stop", DEFAULT_MAX_DEPARTURES_PER_STOP
            ),
            "stops": [
                {
                    "id": str(stop.get("id", "")),
                    "name": stop.get("name") or str(stop.get("id", "")),
                    "label": stop.get("label"),
                    "platforms": [str(p) for p in stop.get("platforms", [])],
                    "timeFrom": _parse_time_bound(stop.get("time_from")),
                    "timeTo": _parse_time_bound(stop.get("time_to")),
                }
                for stop in stops
                if isinstance(stop, dict)
            ],
        }
        try:
            board = BoardConfigRecord.model_validate(raw).to_domain()
        except ValidationError as e:
            raise ValueError(f"Invalid board defaults in {path}: {e}") from e

        logger.info(f"Loaded default board with {len(board.stops)} stop(s) from {path}")
        return board
