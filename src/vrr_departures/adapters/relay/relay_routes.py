"""Starlette routes exposing the relay over HTTP."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse
from starlette.routing import Route

if TYPE_CHECKING:
    from starlette.requests import Request

    from vrr_departures.adapters.relay.vrr_relay import VrrRelay


def create_relay_routes(relay: VrrRelay) -> list[Route]:
    """Build the ``/api/stops``, ``/api/departures`` and ``/health`` routes."""

    async def stops(request: Request) -> JSONResponse:
        result = await relay.search_stops(request.query_params.get("q"))
        return JSONResponse(result.body, status_code=result.status_code)

    async def departures(request: Request) -> JSONResponse:
        result = await relay.departures(request.query_params.get("stop"))
        return JSONResponse(result.body, status_code=result.status_code)

    async def health(_request: Request) -> JSONResponse:
        """Health check endpoint for load balancers and monitoring."""
        timestamp = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return JSONResponse({"status": "ok", "timestamp": timestamp})

    return [
        Route("/api/stops", stops, methods=["GET"]),
        Route("/api/departures", departures, methods=["GET"]),
        Route("/health", health, methods=["GET"]),
    ]
