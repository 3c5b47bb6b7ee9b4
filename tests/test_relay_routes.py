"""Tests for the relay HTTP endpoints."""

import errno
import logging
import socket
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.testclient import TestClient

from vrr_departures.adapters.relay import (
    RequestLoggingMiddleware,
    VrrRelay,
    create_relay_routes,
)
from vrr_departures.adapters.vrr_api import UpstreamResponse

DEPARTURES = {
    "departureList": [
        {"dateTime": {"year": "2024", "month": "5", "day": "3", "hour": "8", "minute": "15"}}
    ]
}


@pytest.fixture
def efa_client() -> MagicMock:
    client = MagicMock()
    client.find_stops = AsyncMock(
        return_value=UpstreamResponse(200, "OK", {"stopFinder": {"points": []}})
    )
    client.departure_monitor = AsyncMock(return_value=UpstreamResponse(200, "OK", DEPARTURES))
    return client


@pytest.fixture
def client(efa_client: MagicMock) -> TestClient:
    app = Starlette(
        routes=create_relay_routes(VrrRelay(efa_client)),
        middleware=[Middleware(RequestLoggingMiddleware)],
    )
    return TestClient(app)


def test_departures_without_stop_is_bad_request(client: TestClient, efa_client: MagicMock) -> None:
    """Given no stop parameter, when requesting departures, then 400 MISSING_PARAMETER is returned."""
    response = client.get("/api/departures")

    assert response.status_code == 400
    assert response.json() == {
        "error": "Missing stop parameter",
        "details": {"type": "MISSING_PARAMETER"},
    }
    efa_client.departure_monitor.assert_not_called()


def test_departures_success_passes_upstream_json_through(
    client: TestClient, efa_client: MagicMock
) -> None:
    """Given a healthy upstream, when requesting departures, then its JSON is returned unchanged."""
    response = client.get("/api/departures", params={"stop": "20009289"})

    assert response.status_code == 200
    assert response.json() == DEPARTURES
    efa_client.departure_monitor.assert_awaited_once_with("20009289")


def test_upstream_error_status_becomes_bad_gateway(
    client: TestClient, efa_client: MagicMock
) -> None:
    """Given a non-2xx upstream answer, when requesting departures, then 502 VRR_API_ERROR is returned."""
    efa_client.departure_monitor.return_value = UpstreamResponse(503, "Service Unavailable")

    response = client.get("/api/departures", params={"stop": "20009289"})

    assert response.status_code == 502
    assert response.json() == {
        "error": "VRR API returned 503 Service Unavailable",
        "details": {
            "type": "VRR_API_ERROR",
            "status": 503,
            "statusText": "Service Unavailable",
            "stopId": "20009289",
        },
    }


@pytest.mark.parametrize(
    ("error", "error_type", "message"),
    [
        (
            socket.gaierror(socket.EAI_NONAME, "Name or service not known"),
            "DNS_ERROR",
            "Cannot resolve VRR API hostname - check internet connection",
        ),
        (
            ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused"),
            "CONNECTION_REFUSED",
            "Connection to VRR API refused",
        ),
        (TimeoutError(), "TIMEOUT", "Connection to VRR API timed out"),
        (
            aiohttp.ClientPayloadError("Response payload is not completed"),
            "NETWORK_ERROR",
            "Network error connecting to VRR API",
        ),
        (RuntimeError("boom"), "UNKNOWN_ERROR", "boom"),
    ],
)
def test_local_exception_is_classified(
    client: TestClient,
    efa_client: MagicMock,
    error: Exception,
    error_type: str,
    message: str,
) -> None:
    """Given a local network exception, when requesting departures, then 500 with its class is returned."""
    efa_client.departure_monitor.side_effect = error

    response = client.get("/api/departures", params={"stop": "20009289"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == message
    assert body["details"]["type"] == error_type
    assert body["details"]["stopId"] == "20009289"
    assert "originalMessage" in body["details"]


def test_short_stop_query_returns_empty_list(client: TestClient, efa_client: MagicMock) -> None:
    """Given a query shorter than three characters, when searching, then no upstream call is made."""
    response = client.get("/api/stops", params={"q": "Es"})

    assert response.status_code == 200
    assert response.json() == {"stops": []}
    efa_client.find_stops.assert_not_called()


def test_stop_search_error_has_no_stop_id(client: TestClient, efa_client: MagicMock) -> None:
    """Given a failing upstream, when searching stops, then the 502 details carry no stopId."""
    efa_client.find_stops.return_value = UpstreamResponse(500, "Internal Server Error")

    response = client.get("/api/stops", params={"q": "Essen"})

    assert response.status_code == 502
    assert "stopId" not in response.json()["details"]
    efa_client.find_stops.assert_awaited_once_with("Essen")


def test_health_reports_ok_with_timestamp(client: TestClient) -> None:
    """Given a running relay, when checking health, then status ok and an ISO timestamp are returned."""
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("Z")


def test_every_request_is_logged(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    """Given any request, when handled, then method, path and query are logged."""
    with caplog.at_level(logging.INFO):
        client.get("/api/stops", params={"q": "Es"})

    assert any("GET /api/stops" in record.message and "'q': 'Es'" in record.message
               for record in caplog.records)
