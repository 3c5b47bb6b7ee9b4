"""Pending drag gesture domain model."""

from dataclasses import dataclass
from enum import StrEnum


class Surface(StrEnum):
    """The two presentations sharing one watch-list order."""

    GRID = "grid"
    SETTINGS = "settings"


@dataclass(frozen=True)
class DragState:
    """The item being moved and the current candidate target."""

    surface: Surface
    source_index: int
    hover_index: int | None = None
