"""Backend relay forwarding stop search and departure queries to EFA."""

from vrr_departures.adapters.relay.departure_sources import (
    LocalDepartureSource,
    LocalStopFinder,
    RelayDepartureSource,
    RelayStopFinder,
)
from vrr_departures.adapters.relay.relay_routes import create_relay_routes
from vrr_departures.adapters.relay.request_logging_middleware import RequestLoggingMiddleware
from vrr_departures.adapters.relay.vrr_relay import RelayResult, VrrRelay

__all__ = [
    "LocalDepartureSource",
    "LocalStopFinder",
    "RelayDepartureSource",
    "RelayResult",
    "RelayStopFinder",
    "RequestLoggingMiddleware",
    "VrrRelay",
    "create_relay_routes",
]
