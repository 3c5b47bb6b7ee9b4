"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """A stop returned by the upstream stop finder."""

    id: str
    name: str
    place: str = ""
