"""Main entry point for the VRR departure board."""

import asyncio
import logging
import sys

import aiohttp

from vrr_departures.adapters.config import AppConfig, BoardDefaultsLoader
from vrr_departures.adapters.relay import (
    LocalDepartureSource,
    LocalStopFinder,
    RelayDepartureSource,
    RelayStopFinder,
    VrrRelay,
)
from vrr_departures.adapters.storage import JsonFileStore
from vrr_departures.adapters.vrr_api import EfaClient
from vrr_departures.adapters.web import BoardWebAdapter
from vrr_departures.adapters.web.broadcasters import StateBroadcaster
from vrr_departures.application.services import (
    BOARD_TOPIC,
    BoardService,
    ConfigStore,
    DepartureFetcher,
    RefreshScheduler,
    RenderCoordinator,
    ReorderEngine,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    logging.getLogger().setLevel(config.log_level)

    try:
        defaults = BoardDefaultsLoader.load(config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid board defaults: {e}")
        sys.exit(1)

    config_store = ConfigStore(JsonFileStore(config.storage_path), config.storage_key, defaults)
    config_store.load()

    # Create aiohttp session for efficient HTTP connections
    async with aiohttp.ClientSession() as session:
        efa_client = EfaClient(
            session,
            base_url=config.vrr_api_base_url,
            timezone=config.timezone,
            timeout_seconds=config.vrr_api_timeout,
        )
        relay = VrrRelay(efa_client)

        if config.relay_base_url:
            logger.info(f"Using remote relay at {config.relay_base_url}")
            departure_source = RelayDepartureSource(
                session, config.relay_base_url, config.timezone, config.vrr_api_timeout
            )
            stop_finder = RelayStopFinder(
                session, config.relay_base_url, config.vrr_api_timeout
            )
        else:
            departure_source = LocalDepartureSource(relay, config.timezone)
            stop_finder = LocalStopFinder(relay)

        render_coordinator = RenderCoordinator(
            config_store, StateBroadcaster(), BOARD_TOPIC, config.timezone
        )
        reorder_engine = ReorderEngine(config_store, render_coordinator)
        scheduler = RefreshScheduler(
            config_store,
            DepartureFetcher(departure_source, config.timezone),
            render_coordinator,
            stagger_seconds=config.scheduler_stagger_seconds,
            resolution_seconds=config.scheduler_resolution_seconds,
        )
        board_service = BoardService(
            config_store, reorder_engine, render_coordinator, scheduler, stop_finder
        )

        display_adapter = BoardWebAdapter(board_service, relay, config, BOARD_TOPIC)

        try:
            await display_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await display_adapter.stop()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
