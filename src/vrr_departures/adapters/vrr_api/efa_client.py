"""HTTP client for the VRR EFA API.

Two read-only requests are used: the stop finder
(``XSLT_STOPFINDER_REQUEST``) and the departure monitor (``XSLT_DM_REQUEST``).
Both answer JSON when asked with ``outputFormat=JSON``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

import aiohttp

from vrr_departures.adapters.vrr_api.api_request_logger import log_api_request
from vrr_departures.adapters.vrr_api.constants import (
    COORD_OUTPUT_FORMAT,
    DEPARTURE_MONITOR_PATH,
    STOP_FINDER_PATH,
    VRR_BASE_URL,
)

if TYPE_CHECKING:
    from aiohttp import ClientSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    """Status line and decoded JSON body of an upstream response."""

    status: int
    status_text: str
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class EfaClient:
    """Client for the VRR EFA endpoints.

    Network exceptions are not caught here; callers classify them.
    """

    def __init__(
        self,
        session: ClientSession,
        base_url: str = VRR_BASE_URL,
        timezone: str = "Europe/Berlin",
        timeout_seconds: int = 10,
        now: Callable[[ZoneInfo], datetime] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            base_url: Base URL of the EFA API.
            timezone: IANA timezone in which 'now' is sent upstream.
            timeout_seconds: Total timeout per request.
            now: Clock returning the current time in a given timezone.
        """
        self._session = session
        self.base_url = base_url.rstrip("/")
        self.timezone = ZoneInfo(timezone)
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._now = now or (lambda tz: datetime.now(tz))

    @staticmethod
    def stop_finder_params(query: str) -> dict[str, str]:
        """Query parameters for a stop search."""
        return {
            "outputFormat": "JSON",
            "type_sf": "any",
            "name_sf": query,
            "coordOutputFormat": COORD_OUTPUT_FORMAT,
            "locationServerActive": "1",
            "odvSugMacro": "true",
        }

    def departure_monitor_params(self, stop_id: str) -> dict[str, str]:
        """Query parameters for a departure monitor request starting now."""
        now = self._now(self.timezone)
        return {
            "outputFormat": "JSON",
            "language": "de",
            "stateless": "1",
            "coordOutputFormat": COORD_OUTPUT_FORMAT,
            "type_dm": "any",
            "name_dm": stop_id,
            "itdDateDay": str(now.day),
            "itdDateMonth": str(now.month),
            "itdDateYear": str(now.year),
            "itdTimeHour": str(now.hour),
            "itdTimeMinute": str(now.minute),
            "mode": "direct",
            "ptOptionsActive": "1",
            "deleteAssignedStops_dm": "1",
            "useProxFootSearch": "0",
            "useRealtime": "1",
        }

    async def find_stops(self, query: str) -> UpstreamResponse:
        """Search stops by name."""
        return await self._get(STOP_FINDER_PATH, self.stop_finder_params(query))

    async def departure_monitor(self, stop_id: str) -> UpstreamResponse:
        """Fetch upcoming departures for a stop."""
        return await self._get(DEPARTURE_MONITOR_PATH, self.departure_monitor_params(stop_id))

    async def _get(self, path: str, params: dict[str, str]) -> UpstreamResponse:
        url = f"{self.base_url}/{path}"
        log_api_request("GET", url, params)
        async with self._session.get(url, params=params, timeout=self._timeout) as response:
            status_text = response.reason or ""
            logger.debug(f"VRR API response: {response.status} {status_text} for {path}")
            if not 200 <= response.status < 300:
                return UpstreamResponse(status=response.status, status_text=status_text)
            # EFA sometimes answers JSON with a text/html content type
            data = await response.json(content_type=None)
            return UpstreamResponse(status=response.status, status_text=status_text, data=data)
