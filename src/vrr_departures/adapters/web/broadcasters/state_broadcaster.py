"""Pub/sub broadcaster that tells every open board surface to re-render."""

from __future__ import annotations

import logging
from typing import Any

from pyview.live_socket import pub_sub_hub
from pyview.vendor.flet.pubsub import PubSub

from vrr_departures.domain.contracts.state_broadcaster import StateBroadcasterProtocol

logger = logging.getLogger(__name__)

UPDATE_MESSAGE = "update"


class StateBroadcaster(StateBroadcasterProtocol):
    """Publishes ``UPDATE_MESSAGE`` on a board topic.

    The message carries no board state. Each LiveView re-reads the current
    view from the board service when it arrives, so the grid and the settings
    surface always render the same order.
    """

    def __init__(self, hub: Any = pub_sub_hub) -> None:
        self._hub = hub

    async def broadcast_update(self, topic: str) -> None:
        try:
            await PubSub(self._hub, topic).send_all_on_topic_async(topic, UPDATE_MESSAGE)
        except Exception as e:
            logger.error(f"Failed to broadcast board update on {topic}: {e}", exc_info=True)
            return
        logger.debug(f"Broadcast board update on {topic}")
