"""Web adapters for the board and settings surfaces."""

from vrr_departures.adapters.web.pyview_app import BoardWebAdapter

__all__ = ["BoardWebAdapter"]
