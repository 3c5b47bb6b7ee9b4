"""Servers for the web adapter."""

from vrr_departures.adapters.web.servers.static_file_server import StaticFileServer

__all__ = ["StaticFileServer"]
