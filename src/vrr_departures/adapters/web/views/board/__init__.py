"""Board grid LiveView."""

from vrr_departures.adapters.web.views.board.board_view import (
    BoardLiveView,
    create_board_live_view,
)

__all__ = ["BoardLiveView", "create_board_live_view"]
