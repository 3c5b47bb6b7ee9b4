"""State classes for the web LiveViews."""

from vrr_departures.adapters.web.state.board_state import BoardState

__all__ = ["BoardState"]
