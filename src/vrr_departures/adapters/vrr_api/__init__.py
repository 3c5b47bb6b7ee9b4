"""VRR EFA API adapters."""

from vrr_departures.adapters.vrr_api.departure_parser import DepartureParser
from vrr_departures.adapters.vrr_api.efa_client import EfaClient, UpstreamResponse
from vrr_departures.adapters.vrr_api.error_classifier import ClassifiedError, classify_exception
from vrr_departures.adapters.vrr_api.stop_parser import StopParser

__all__ = [
    "ClassifiedError",
    "DepartureParser",
    "EfaClient",
    "StopParser",
    "UpstreamResponse",
    "classify_exception",
]
