"""Base LiveView shared by both board surfaces."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from pyview import LiveView, LiveViewSocket, is_connected
from pyview.events import InfoEvent

from vrr_departures.adapters.web.broadcasters import UPDATE_MESSAGE
from vrr_departures.adapters.web.gesture_input import GestureTranslator
from vrr_departures.adapters.web.state import BoardState
from vrr_departures.adapters.web.views.template_renderer import render_template

if TYPE_CHECKING:
    from vrr_departures.application.services.board_service import BoardService

logger = logging.getLogger(__name__)


class BoardSurfaceLiveView(LiveView[BoardState]):
    """Subscribes to board updates and forwards drag gestures.

    Subclasses set ``template_path`` and add their own events.
    """

    template_path = ""

    def __init__(self, board_service: BoardService, broadcast_topic: str, title: str) -> None:
        super().__init__()
        self.board_service = board_service
        self.broadcast_topic = broadcast_topic
        self.title = title
        self.gestures = GestureTranslator(board_service.reorder_engine)

    async def mount(self, socket: LiveViewSocket[BoardState], _session: dict) -> None:
        socket.context = BoardState(view=self.board_service.current_view())
        if is_connected(socket):
            try:
                await socket.subscribe(self.broadcast_topic)
                logger.debug(f"Subscribed socket to broadcast topic: {self.broadcast_topic}")
            except Exception as e:
                logger.error(
                    f"Failed to subscribe to topic {self.broadcast_topic}: {e}", exc_info=True
                )

    async def handle_info(self, event: str | InfoEvent, socket: LiveViewSocket[BoardState]) -> None:
        """Re-read the board view on every board update broadcast."""
        payload = event.payload if isinstance(event, InfoEvent) else event
        if payload == UPDATE_MESSAGE:
            socket.context.view = self.board_service.current_view()
            return
        logger.debug(f"Ignoring info event: {event}")

    async def handle_event(
        self, event: str, payload: dict[str, Any], socket: LiveViewSocket[BoardState]
    ) -> None:
        if event == "gesture":
            await self.gestures.handle(payload)
        else:
            logger.debug(f"Unhandled event {event}: {payload}")
        socket.context.view = self.board_service.current_view()

    def build_assigns(self, state: BoardState) -> dict[str, Any]:
        view = state.view or self.board_service.current_view()
        return {
            "title": self.title,
            **asdict(view),
            "search_query": state.search_query,
            "search_results": [asdict(s) for s in state.search_results],
            "search_error": state.search_error,
            "form_error": state.form_error,
            "notice": state.notice,
        }

    async def render(self, assigns: BoardState, meta: Any) -> Any:
        return render_template(self.template_path, self.build_assigns(assigns), meta)
