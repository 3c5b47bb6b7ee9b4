"""LiveViews for the board grid and settings surfaces."""

from vrr_departures.adapters.web.views.board import BoardLiveView, create_board_live_view
from vrr_departures.adapters.web.views.settings import (
    SettingsLiveView,
    create_settings_live_view,
)

__all__ = [
    "BoardLiveView",
    "SettingsLiveView",
    "create_board_live_view",
    "create_settings_live_view",
]
