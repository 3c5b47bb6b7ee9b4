"""Contracts (protocols) for collaborators of the board engine."""

from vrr_departures.domain.contracts.clock import Clock
from vrr_departures.domain.contracts.departure_fetcher import DepartureFetcherProtocol
from vrr_departures.domain.contracts.key_value_store import KeyValueStore
from vrr_departures.domain.contracts.state_broadcaster import StateBroadcasterProtocol

__all__ = [
    "Clock",
    "DepartureFetcherProtocol",
    "KeyValueStore",
    "StateBroadcasterProtocol",
]
