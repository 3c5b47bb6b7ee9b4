"""Ports (interfaces) for the ports-and-adapters architecture."""

from vrr_departures.domain.ports.departure_source import DepartureSource
from vrr_departures.domain.ports.stop_finder import StopFinder

__all__ = [
    "DepartureSource",
    "StopFinder",
]
