"""Relay between the board and the upstream EFA API.

Successful upstream responses are passed through unchanged. Failures are
turned into ``{error, details}`` bodies: a non-2xx upstream answer becomes a
502 ``VRR_API_ERROR``, a local exception a 500 with its classified type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from vrr_departures.adapters.vrr_api.departure_parser import DepartureParser
from vrr_departures.adapters.vrr_api.error_classifier import classify_exception
from vrr_departures.adapters.vrr_api.stop_parser import StopParser
from vrr_departures.domain.models.error_details import ErrorDetails, ErrorResponse
from vrr_departures.domain.models.fetch_failure import ErrorType

if TYPE_CHECKING:
    from vrr_departures.adapters.vrr_api.efa_client import EfaClient, UpstreamResponse

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


@dataclass(frozen=True)
class RelayResult:
    """HTTP status code and JSON body of a relay answer."""

    status_code: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def missing_parameter(name: str) -> RelayResult:
    """400 answer for a missing query parameter."""
    return RelayResult(
        400,
        ErrorResponse(
            error=f"Missing {name} parameter",
            details=ErrorDetails(type=ErrorType.MISSING_PARAMETER),
        ).to_json(),
    )


def upstream_error(response: UpstreamResponse, stop_id: str | None = None) -> RelayResult:
    """502 answer for a non-2xx upstream response."""
    return RelayResult(
        502,
        ErrorResponse(
            error=f"VRR API returned {response.status} {response.status_text}",
            details=ErrorDetails(
                type=ErrorType.VRR_API_ERROR,
                status=response.status,
                status_text=response.status_text,
                stop_id=stop_id,
            ),
        ).to_json(),
    )


def exception_error(error: Exception, stop_id: str | None = None) -> RelayResult:
    """500 answer for an exception raised while contacting upstream."""
    classified = classify_exception(error)
    return RelayResult(
        500,
        ErrorResponse(
            error=classified.message,
            details=ErrorDetails(
                type=classified.error_type,
                code=classified.code,
                stop_id=stop_id,
                original_message=str(error) or type(error).__name__,
            ),
        ).to_json(),
    )


class VrrRelay:
    """Forwards the two read-only queries the board needs."""

    def __init__(self, efa_client: EfaClient) -> None:
        self.efa_client = efa_client

    async def search_stops(self, query: str | None) -> RelayResult:
        """Search stops; queries shorter than three characters answer an empty list."""
        if not query or len(query) < MIN_QUERY_LENGTH:
            logger.debug(f"Stop search: query too short ({query!r})")
            return RelayResult(200, {"stops": []})

        try:
            response = await self.efa_client.find_stops(query)
        except Exception as e:
            logger.error(f"Stop search exception for {query!r}: {e}", exc_info=True)
            return exception_error(e)

        if not response.ok:
            logger.error(f"Stop search failed: {response.status} {response.status_text}")
            return upstream_error(response)

        data = response.data if isinstance(response.data, dict) else {}
        logger.info(
            f"Stop search successful for {query!r}: {StopParser.count_points(data)} result(s)"
        )
        return RelayResult(200, data)

    async def departures(self, stop_id: str | None) -> RelayResult:
        """Fetch the departure monitor for a stop."""
        if not stop_id:
            logger.warning("Departures request missing stop parameter")
            return missing_parameter("stop")

        try:
            response = await self.efa_client.departure_monitor(stop_id)
        except Exception as e:
            logger.error(f"Departures fetch exception for stop {stop_id}: {e}", exc_info=True)
            return exception_error(e, stop_id)

        if not response.ok:
            logger.error(
                f"Departures fetch failed for stop {stop_id}: "
                f"{response.status} {response.status_text}"
            )
            return upstream_error(response, stop_id)

        data = response.data if isinstance(response.data, dict) else {}
        count = len(DepartureParser.extract_departure_list(data))
        logger.info(f"Departures fetch successful for stop {stop_id}: {count} departure(s)")
        return RelayResult(200, data)
