"""Configuration adapters."""

from vrr_departures.adapters.config.app_config import AppConfig
from vrr_departures.adapters.config.board_defaults_loader import BoardDefaultsLoader

__all__ = ["AppConfig", "BoardDefaultsLoader"]
