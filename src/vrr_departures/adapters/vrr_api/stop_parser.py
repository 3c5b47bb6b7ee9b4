"""Parser for EFA stop finder responses."""

from typing import Any

from vrr_departures.domain.models.station import Station


class StopParser:
    """Parses ``stopFinder.points`` into Station objects."""

    @staticmethod
    def extract_points(data: Any) -> list[dict[str, Any]]:
        """Return the raw points whether EFA sent a list or a single ``{"point": ...}``."""
        if not isinstance(data, dict):
            return []
        stop_finder = data.get("stopFinder")
        if not isinstance(stop_finder, dict):
            return []
        points = stop_finder.get("points")
        if isinstance(points, list):
            return [p for p in points if isinstance(p, dict)]
        if isinstance(points, dict):
            point = points.get("point")
            if isinstance(point, dict):
                return [point]
            if isinstance(point, list):
                return [p for p in point if isinstance(p, dict)]
        return []

    @staticmethod
    def count_points(data: Any) -> int:
        return len(StopParser.extract_points(data))

    @staticmethod
    def parse_stations(data: Any) -> list[Station]:
        """Parse stop points into stations, skipping addresses and POIs."""
        stations = []
        for point in StopParser.extract_points(data):
            point_type = point.get("anyType") or point.get("type")
            if point_type and point_type not in ("stop", "any"):
                continue
            ref = point.get("ref") if isinstance(point.get("ref"), dict) else {}
            station_id = str(point.get("stateless") or ref.get("id") or "").strip()
            if not station_id:
                continue
            stations.append(
                Station(
                    id=station_id,
                    name=str(point.get("name", station_id)),
                    place=str(ref.get("place", "")),
                )
            )
        return stations
