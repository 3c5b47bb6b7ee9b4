"""Board grid LiveView: one panel of upcoming departures per watched stop."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vrr_departures.adapters.web.views.board_live_view import BoardSurfaceLiveView

if TYPE_CHECKING:
    from vrr_departures.application.services.board_service import BoardService


class BoardLiveView(BoardSurfaceLiveView):
    """Grid surface. Panels can be dragged to reorder the watch list."""

    template_path = "board/board.html"


def create_board_live_view(
    board_service: BoardService, broadcast_topic: str, title: str
) -> type[BoardLiveView]:
    """Create a configured BoardLiveView class.

    PyView's add_live_view expects a class, not an instance.
    """

    class ConfiguredBoardLiveView(BoardLiveView):
        def __init__(self) -> None:
            super().__init__(board_service, broadcast_topic, title)

    return ConfiguredBoardLiveView
