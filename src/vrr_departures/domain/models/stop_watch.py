"""Stop watch domain model."""

from dataclasses import dataclass, field
from uuid import uuid4

MINUTES_PER_DAY = 24 * 60


def _new_entry_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class StopWatch:
    """One watched stop with its display and filter settings.

    Values are canonical after construction: an empty name becomes the id,
    an empty label becomes None and platforms are stripped of blanks.
    ``entry_id`` identifies the list entry across edits and reorders; it is
    not persisted and does not take part in equality.
    """

    id: str  # Upstream stop identifier (EFA stateless id, e.g. "20009289")
    name: str
    label: str | None = None  # User override for the displayed name
    platforms: frozenset[str] = field(default_factory=frozenset)  # Empty = no platform filter
    time_from: int | None = None  # Minute of day (0..1439), inclusive
    time_to: int | None = None  # Minute of day (0..1439), inclusive
    entry_id: str = field(default_factory=_new_entry_id, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name or self.id)
        object.__setattr__(self, "label", self.label or None)
        object.__setattr__(
            self,
            "platforms",
            frozenset(p.strip() for p in self.platforms if p and p.strip()),
        )

    @property
    def display_name(self) -> str:
        """Name shown on both surfaces: label, else name, else id."""
        return self.label or self.name or self.id

    @property
    def has_time_window(self) -> bool:
        """Whether either time bound is set."""
        return self.time_from is not None or self.time_to is not None

    @property
    def query(self) -> tuple[str, frozenset[str], int | None, int | None]:
        """The fields that decide what a fetch returns."""
        return (self.id, self.platforms, self.time_from, self.time_to)
