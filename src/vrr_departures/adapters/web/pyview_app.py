"""PyView web adapter serving the board, the settings page and the relay."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import uvicorn
from markupsafe import Markup
from pyview import PyView
from pyview.template import defaultRootTemplate

from vrr_departures.adapters.relay import RequestLoggingMiddleware, create_relay_routes
from vrr_departures.application.services.render_coordinator import BOARD_TOPIC

from .servers import StaticFileServer
from .views import create_board_live_view, create_settings_live_view

if TYPE_CHECKING:
    from vrr_departures.adapters.config import AppConfig
    from vrr_departures.adapters.relay import VrrRelay
    from vrr_departures.application.services.board_service import BoardService

logger = logging.getLogger(__name__)

HEAD_MARKUP = Markup(
    '<link rel="stylesheet" href="/static/board.css">'
    '<script src="/static/board_hooks.js"></script>'
)


class BoardWebAdapter:
    """Builds the ASGI app and runs it under uvicorn alongside the refresh scheduler."""

    def __init__(
        self,
        board_service: BoardService,
        relay: VrrRelay,
        config: AppConfig,
        broadcast_topic: str = BOARD_TOPIC,
    ) -> None:
        """Initialize the web adapter.

        Args:
            board_service: Operations both surfaces call.
            relay: In-process relay exposed under ``/api``.
            config: Application configuration.
            broadcast_topic: Pub/sub topic surfaces re-render on.
        """
        self.board_service = board_service
        self.relay = relay
        self.config = config
        self.broadcast_topic = broadcast_topic
        self._server: uvicorn.Server | None = None

    def build_app(self) -> Any:
        """Create the PyView app wrapped in request logging."""
        app = PyView()
        app.rootTemplate = defaultRootTemplate(
            title=self.config.title,
            title_suffix="",
            css=HEAD_MARKUP,
        )

        app.add_live_view(
            "/",
            create_board_live_view(self.board_service, self.broadcast_topic, self.config.title),
        )
        app.add_live_view(
            "/settings",
            create_settings_live_view(
                self.board_service, self.broadcast_topic, self.config.title
            ),
        )
        logger.info("Registered board at '/' and settings at '/settings'")

        for route in create_relay_routes(self.relay):
            app.routes.append(route)

        StaticFileServer().register_routes(app)

        return RequestLoggingMiddleware(app)

    async def start(self) -> None:
        """Start the refresh scheduler and serve until shutdown."""
        app = self.build_app()
        await self.board_service.scheduler.start()

        config = uvicorn.Config(
            app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
        )
        self._server = uvicorn.Server(config)
        try:
            await self._server.serve()
        finally:
            await self.board_service.scheduler.stop()

    async def stop(self) -> None:
        """Stop the web server."""
        await self.board_service.scheduler.stop()
        if self._server:
            self._server.should_exit = True
