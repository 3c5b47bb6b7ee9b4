"""Formatter for departure times and snapshot ages."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from vrr_departures.domain.models.departure import Departure


class DepartureFormatter:
    """Formats times for display in the board's timezone."""

    def __init__(self, timezone: str = "Europe/Berlin") -> None:
        """Initialize the formatter.

        Args:
            timezone: IANA timezone name used for clock times.
        """
        self.timezone = ZoneInfo(timezone)

    def format_clock_time(self, time: datetime) -> str:
        """Format as HH:MM in the board's timezone."""
        if time.tzinfo is not None:
            time = time.astimezone(self.timezone)
        return time.strftime("%H:%M")

    def format_countdown(self, departure: Departure, now: datetime) -> str:
        """Format time until departure compactly (e.g. '5m', '2h40m', 'now')."""
        return self.format_compact_duration(departure.effective_time - now)

    def format_compact_duration(self, delta: timedelta) -> str:
        """Format timedelta as compact hours and minutes (e.g., '2h40m', '5m', 'now')."""
        total_seconds = int(delta.total_seconds())
        if total_seconds < 60:
            return "now"

        total_minutes = total_seconds // 60
        if total_minutes < 60:
            return f"{total_minutes}m"

        hours = total_minutes // 60
        minutes = total_minutes % 60
        if minutes == 0:
            return f"{hours}h"
        return f"{hours}h{minutes}m"

    def format_age(self, fetched_at: datetime, now: datetime) -> str:
        """Format how long ago a snapshot was fetched (e.g. '3m ago')."""
        total_seconds = int((now - fetched_at).total_seconds())
        if total_seconds < 60:
            return "just now"
        return f"{self.format_compact_duration(now - fetched_at)} ago"

    @staticmethod
    def format_minute_of_day(minute: int | None) -> str:
        """Format a minute-of-day bound as HH:MM, or an empty string when unset."""
        if minute is None:
            return ""
        return f"{minute // 60:02d}:{minute % 60:02d}"
