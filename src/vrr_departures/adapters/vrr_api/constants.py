"""Constants for the VRR EFA API."""

VRR_BASE_URL = "https://efa.vrr.de/vrr"
STOP_FINDER_PATH = "XSLT_STOPFINDER_REQUEST"
DEPARTURE_MONITOR_PATH = "XSLT_DM_REQUEST"

# Coordinates are requested in decimal degrees
COORD_OUTPUT_FORMAT = "WGS84[DD.ddddd]"
