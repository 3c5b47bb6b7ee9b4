"""Protocol for telling board surfaces to re-render."""

from typing import Protocol


class StateBroadcasterProtocol(Protocol):
    """Notifies every surface subscribed to a topic that the board changed."""

    async def broadcast_update(self, topic: str) -> None:
        """Signal subscribers of ``topic`` to re-read the board view. Never raises."""
        ...
