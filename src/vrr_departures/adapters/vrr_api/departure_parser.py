"""Parser for EFA departure monitor responses."""

import logging
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from vrr_departures.domain.models.departure import Departure

logger = logging.getLogger(__name__)

# EFA motType codes
MOT_TYPE_NAMES = {
    "0": "Zug",
    "1": "S-Bahn",
    "2": "U-Bahn",
    "3": "Stadtbahn",
    "4": "Straßenbahn",
    "5": "Bus",
    "6": "Regionalbus",
    "7": "Schnellbus",
    "8": "Seil-/Zahnradbahn",
    "9": "Schiff",
    "10": "AST/Rufbus",
    "11": "Sonstige",
}


class DepartureParser:
    """Parses EFA ``departureList`` entries into Departure objects."""

    def __init__(self, timezone: str = "Europe/Berlin") -> None:
        """Initialize the parser.

        Args:
            timezone: IANA timezone EFA local times are interpreted in.
        """
        self.timezone = ZoneInfo(timezone)

    @staticmethod
    def extract_departure_list(data: Any) -> list[dict[str, Any]]:
        """Return the raw departure entries whatever shape the list arrives in.

        EFA sends a list for several departures, a single object (sometimes
        wrapped as ``{"departure": {...}}``) for one, and null or nothing for none.
        """
        if not isinstance(data, dict):
            return []
        departures = data.get("departureList")
        if isinstance(departures, list):
            return [d for d in departures if isinstance(d, dict)]
        if isinstance(departures, dict):
            inner = departures.get("departure")
            if isinstance(inner, list):
                return [d for d in inner if isinstance(d, dict)]
            if isinstance(inner, dict):
                return [inner]
            return [departures]
        return []

    def parse_departures(self, data: Any) -> list[Departure]:
        """Parse all departures of a departure monitor response."""
        results = []
        for entry in self.extract_departure_list(data):
            departure = self._parse_departure(entry)
            if departure:
                results.append(departure)
        return results

    def _parse_date_time(self, value: Any) -> datetime | None:
        """Parse an EFA ``{year, month, day, hour, minute}`` object."""
        if not isinstance(value, dict):
            return None
        try:
            return datetime(
                int(value["year"]),
                int(value["month"]),
                int(value["day"]),
                int(value.get("hour", 0)),
                int(value.get("minute", 0)),
                tzinfo=self.timezone,
            )
        except (KeyError, TypeError, ValueError):
            return None

    @staticmethod
    def _extract_line(serving_line: dict[str, Any]) -> str:
        return str(serving_line.get("symbol") or serving_line.get("number") or "").strip()

    @staticmethod
    def _extract_platform(entry: dict[str, Any]) -> str | None:
        platform = entry.get("platform") or entry.get("platformName")
        if platform is None:
            return None
        platform = str(platform).strip()
        return platform or None

    @staticmethod
    def _extract_transport_type(serving_line: dict[str, Any]) -> str:
        name = serving_line.get("name")
        if name:
            return str(name)
        return MOT_TYPE_NAMES.get(str(serving_line.get("motType", "")), "")

    @staticmethod
    def _is_cancelled(entry: dict[str, Any], serving_line: dict[str, Any]) -> bool:
        statuses = (
            str(entry.get("realtimeTripStatus", "")),
            str(serving_line.get("realtimeStatus", "")),
        )
        return any("CANCEL" in status.upper() for status in statuses)

    def _parse_departure(self, entry: dict[str, Any]) -> Departure | None:
        """Parse a single departure entry."""
        planned_time = self._parse_date_time(entry.get("dateTime"))
        if planned_time is None:
            logger.debug(f"Skipping departure without planned time: {entry.get('servingLine')}")
            return None

        serving_line = entry.get("servingLine")
        if not isinstance(serving_line, dict):
            serving_line = {}

        return Departure(
            line=self._extract_line(serving_line),
            destination=str(serving_line.get("direction", "")).strip(),
            planned_time=planned_time,
            estimated_time=self._parse_date_time(entry.get("realDateTime")),
            platform=self._extract_platform(entry),
            transport_type=self._extract_transport_type(serving_line),
            is_cancelled=self._is_cancelled(entry, serving_line),
        )
