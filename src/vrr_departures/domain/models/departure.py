"""Departure domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Departure:
    """Represents a single departure from a stop."""

    line: str
    destination: str
    planned_time: datetime
    estimated_time: datetime | None
    platform: str | None
    transport_type: str = ""
    is_cancelled: bool = False

    @property
    def effective_time(self) -> datetime:
        """Estimated time if the upstream reports one, planned time otherwise."""
        return self.estimated_time or self.planned_time

    @property
    def delay_minutes(self) -> int | None:
        """Positive delay in whole minutes, or None when on time or unknown."""
        if self.estimated_time is None:
            return None
        delay = int((self.estimated_time - self.planned_time).total_seconds() // 60)
        return delay if delay > 0 else None
