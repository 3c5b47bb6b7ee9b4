"""Broadcasters for web adapter."""

from vrr_departures.adapters.web.broadcasters.state_broadcaster import (
    UPDATE_MESSAGE,
    StateBroadcaster,
)

__all__ = ["UPDATE_MESSAGE", "StateBroadcaster"]
