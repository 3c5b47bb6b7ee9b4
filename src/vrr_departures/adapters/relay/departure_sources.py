"""Departure sources and stop finders backed by the relay.

The local variants call the in-process relay directly; the remote variants
talk to a relay running elsewhere over HTTP. Both raise RelayError carrying the
relay's classified failure.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from vrr_departures.adapters.vrr_api.departure_parser import DepartureParser
from vrr_departures.adapters.vrr_api.error_classifier import classify_exception
from vrr_departures.adapters.vrr_api.stop_parser import StopParser
from vrr_departures.domain.models.fetch_failure import ErrorType, FetchFailure, RelayError
from vrr_departures.domain.ports import DepartureSource, StopFinder

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from vrr_departures.adapters.relay.vrr_relay import RelayResult, VrrRelay
    from vrr_departures.domain.models.departure import Departure
    from vrr_departures.domain.models.station import Station

logger = logging.getLogger(__name__)


def failure_from_body(status_code: int, body: Any) -> FetchFailure:
    """Turn a relay ``{error, details}`` body into a FetchFailure."""
    details = body.get("details") if isinstance(body, dict) else None
    if not isinstance(details, dict):
        details = {}
    try:
        error_type = ErrorType(details.get("type", ErrorType.UNKNOWN_ERROR))
    except ValueError:
        error_type = ErrorType.UNKNOWN_ERROR
    message = body.get("error") if isinstance(body, dict) else None
    return FetchFailure(
        error_type=error_type,
        message=str(message or f"Relay returned HTTP {status_code}"),
        status=details.get("status", status_code),
    )


def _raise_for_result(result: RelayResult) -> None:
    if not result.ok:
        raise RelayError(failure_from_body(result.status_code, result.body))


class LocalDepartureSource(DepartureSource):
    """Departure source calling the in-process relay."""

    def __init__(self, relay: VrrRelay, timezone: str = "Europe/Berlin") -> None:
        self.relay = relay
        self.parser = DepartureParser(timezone)

    async def get_departures(self, stop_id: str) -> list[Departure]:
        result = await self.relay.departures(stop_id)
        _raise_for_result(result)
        return self.parser.parse_departures(result.body)


class LocalStopFinder(StopFinder):
    """Stop finder calling the in-process relay."""

    def __init__(self, relay: VrrRelay) -> None:
        self.relay = relay

    async def search_stops(self, query: str) -> list[Station]:
        result = await self.relay.search_stops(query)
        _raise_for_result(result)
        return StopParser.parse_stations(result.body)


class _RemoteRelayClient:
    """GETs relay endpoints and maps every failure to RelayError."""

    def __init__(self, session: ClientSession, base_url: str, timeout_seconds: int = 10) -> None:
        self._session = session
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def get_json(self, path: str, params: dict[str, str]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with self._session.get(url, params=params, timeout=self._timeout) as response:
                body = await response.json(content_type=None)
                if response.status != 200:
                    raise RelayError(failure_from_body(response.status, body))
                return body
        except RelayError:
            raise
        except (aiohttp.ClientError, TimeoutError, OSError, ValueError) as e:
            classified = classify_exception(e, service="relay")
            logger.warning(f"Relay request {path} failed: {classified.error_type} {e}")
            raise RelayError(FetchFailure(classified.error_type, classified.message)) from e


class RelayDepartureSource(DepartureSource):
    """Departure source calling a remote relay over HTTP."""

    def __init__(
        self,
        session: ClientSession,
        base_url: str,
        timezone: str = "Europe/Berlin",
        timeout_seconds: int = 10,
    ) -> None:
        self._client = _RemoteRelayClient(session, base_url, timeout_seconds)
        self.parser = DepartureParser(timezone)

    async def get_departures(self, stop_id: str) -> list[Departure]:
        body = await self._client.get_json("/api/departures", {"stop": stop_id})
        return self.parser.parse_departures(body)


class RelayStopFinder(StopFinder):
    """Stop finder calling a remote relay over HTTP."""

    def __init__(self, session: ClientSession, base_url: str, timeout_seconds: int = 10) -> None:
        self._client = _RemoteRelayClient(session, base_url, timeout_seconds)

    async def search_stops(self, query: str) -> list[Station]:
        body = await self._client.get_json("/api/stops", {"q": query})
        return StopParser.parse_stations(body)
