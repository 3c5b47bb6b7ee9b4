"""Settings LiveView: edit, add, remove and reorder watched stops."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from vrr_departures.adapters.web.form_parsing import (
    field,
    parse_index,
    parse_optional_int,
    parse_stop_fields,
)
from vrr_departures.adapters.web.views.board_live_view import BoardSurfaceLiveView
from vrr_departures.application.services.config_store import ConfigValidationError
from vrr_departures.domain.models.fetch_failure import RelayError

if TYPE_CHECKING:
    from pyview import LiveViewSocket

    from vrr_departures.adapters.web.state import BoardState
    from vrr_departures.application.services.board_service import BoardService

logger = logging.getLogger(__name__)


class SettingsLiveView(BoardSurfaceLiveView):
    """Settings surface. Rows share the grid's order and can be dragged too."""

    template_path = "settings/settings.html"

    async def handle_event(
        self, event: str, payload: dict[str, Any], socket: LiveViewSocket[BoardState]
    ) -> None:
        state = socket.context
        state.form_error = ""
        state.notice = ""
        try:
            if event == "gesture":
                await self.gestures.handle(payload)
            elif event == "add-stop":
                stop_id = field(payload, "stop_id")
                if not stop_id:
                    raise ConfigValidationError("Stop id is required")
                await self.board_service.add_stop(stop_id, **parse_stop_fields(payload))
                state.notice = f"Added {stop_id}"
            elif event == "pick-station":
                await self.board_service.add_stop(field(payload, "id"), field(payload, "name"))
                state.search_results = []
                state.search_query = ""
                state.notice = f"Added {field(payload, 'name') or field(payload, 'id')}"
            elif event == "save-stop":
                await self.board_service.update_stop(
                    parse_index(payload), **parse_stop_fields(payload)
                )
                state.notice = "Saved"
            elif event == "remove-stop":
                await self.board_service.remove_stop(parse_index(payload))
            elif event == "save-settings":
                await self.board_service.update_settings(
                    parse_optional_int(payload, "refresh_interval_seconds"),
                    parse_optional_int(payload, "max_departures_per_stop"),
                )
                state.notice = "Settings saved"
            elif event == "reset":
                await self.board_service.reset()
                state.notice = "Restored defaults"
            elif event == "search":
                await self._search(field(payload, "q"), state)
            else:
                logger.debug(f"Unhandled event {event}: {payload}")
        except ConfigValidationError as e:
            logger.info(f"Rejected settings change ({event}): {e}")
            state.form_error = str(e)
        state.view = self.board_service.current_view()

    async def _search(self, query: str, state: BoardState) -> None:
        state.search_query = query
        state.search_error = ""
        try:
            state.search_results = await self.board_service.search_stops(query)
        except RelayError as e:
            state.search_results = []
            state.search_error = f"{e.failure.error_type}: {e.failure.message}"


def create_settings_live_view(
    board_service: BoardService, broadcast_topic: str, title: str
) -> type[SettingsLiveView]:
    """Create a configured SettingsLiveView class."""

    class ConfiguredSettingsLiveView(SettingsLiveView):
        def __init__(self) -> None:
            super().__init__(board_service, broadcast_topic, title)

    return ConfiguredSettingsLiveView
