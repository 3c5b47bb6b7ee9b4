"""Settings LiveView."""

from vrr_departures.adapters.web.views.settings.settings_view import (
    SettingsLiveView,
    create_settings_live_view,
)

__all__ = ["SettingsLiveView", "create_settings_live_view"]
