"""Board LiveView state dataclass."""

from dataclasses import dataclass, field

from vrr_departures.application.services.render_coordinator import BoardView
from vrr_departures.domain.models.station import Station


@dataclass
class BoardState:
    """Per-connection state shared by the grid and settings LiveViews."""

    view: BoardView | None = None
    search_query: str = ""
    search_results: list[Station] = field(default_factory=list)
    search_error: str = ""
    form_error: str = ""
    notice: str = ""
