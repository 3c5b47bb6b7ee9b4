"""Tests for per-stop departure fetching, filtering and ordering."""

from datetime import UTC, datetime

import pytest

from tests.fakes import FakeDepartureSource, make_departure
from vrr_departures.application.services import DepartureFetcher
from vrr_departures.application.services.departure_fetcher import is_within_window
from vrr_departures.domain.models import (
    DepartureSnapshot,
    ErrorType,
    FetchFailure,
    RelayError,
    StopWatch,
)

FETCHED_AT = datetime(2024, 5, 3, 6, 0, tzinfo=UTC)


def _fetcher(source: FakeDepartureSource) -> DepartureFetcher:
    return DepartureFetcher(source, "Europe/Berlin", now=lambda: FETCHED_AT)


@pytest.mark.asyncio
async def test_time_window_keeps_only_departures_inside_bounds() -> None:
    """Given departures at 08:00, 08:15 and 08:30, when the window is 08:10-08:25, then only 08:15 remains."""
    source = FakeDepartureSource(
        [make_departure("U11", 8, 0), make_departure("U11", 8, 15), make_departure("U11", 8, 30)]
    )
    watch = StopWatch(id="20009289", name="Essen Hbf", time_from=8 * 60 + 10, time_to=8 * 60 + 25)

    result = await _fetcher(source).fetch(watch, 10)

    assert isinstance(result, DepartureSnapshot)
    assert [d.planned_time.strftime("%H:%M") for d in result.departures] == ["08:15"]
    assert result.fetched_at == FETCHED_AT
    assert result.stale is False


@pytest.mark.asyncio
async def test_window_bounds_are_inclusive() -> None:
    """Given departures exactly on the bounds, when filtering, then both are kept."""
    source = FakeDepartureSource([make_departure("1", 8, 10), make_departure("2", 8, 25)])
    watch = StopWatch(id="A", name="A", time_from=8 * 60 + 10, time_to=8 * 60 + 25)

    result = await _fetcher(source).fetch(watch, 10)

    assert isinstance(result, DepartureSnapshot)
    assert len(result.departures) == 2


@pytest.mark.asyncio
async def test_platform_filter_drops_other_platforms() -> None:
    """Given a platform set, when filtering, then departures on other or unknown platforms are dropped."""
    source = FakeDepartureSource(
        [
            make_departure("107", 8, 1, platform="1"),
            make_departure("108", 8, 2, platform="2"),
            make_departure("109", 8, 3, platform=None),
            make_departure("U17", 8, 4, platform=" 3 "),
        ]
    )
    watch = StopWatch(id="A", name="A", platforms=frozenset({"1", "3"}))

    result = await _fetcher(source).fetch(watch, 10)

    assert isinstance(result, DepartureSnapshot)
    assert [d.line for d in result.departures] == ["107", "U17"]


@pytest.mark.asyncio
async def test_orders_by_estimated_time_then_line_and_truncates() -> None:
    """Given delays and equal times, when fetching, then ordering uses estimated time with line as tie-break."""
    source = FakeDepartureSource(
        [
            make_departure("U18", 8, 0, delay_minutes=10),
            make_departure("U11", 8, 5),
            make_departure("107", 8, 5),
            make_departure("SB16", 8, 20),
        ]
    )
    watch = StopWatch(id="A", name="A")

    result = await _fetcher(source).fetch(watch, 3)

    assert isinstance(result, DepartureSnapshot)
    assert [d.line for d in result.departures] == ["107", "U11", "U18"]


@pytest.mark.asyncio
async def test_relay_error_becomes_classified_failure() -> None:
    """Given a relay failure, when fetching, then the classified failure is returned instead of raised."""
    source = FakeDepartureSource()
    failure = FetchFailure(ErrorType.VRR_API_ERROR, "VRR API returned 503 Service Unavailable", 503)
    source.error = RelayError(failure)

    result = await _fetcher(source).fetch(StopWatch(id="A", name="A"), 10)

    assert result == failure


@pytest.mark.asyncio
async def test_unexpected_error_becomes_unknown_failure() -> None:
    """Given an unexpected exception, when fetching, then an UNKNOWN_ERROR failure is returned."""
    source = FakeDepartureSource()
    source.error = KeyError("departureList")

    result = await _fetcher(source).fetch(StopWatch(id="A", name="A"), 10)

    assert isinstance(result, FetchFailure)
    assert result.error_type == ErrorType.UNKNOWN_ERROR


@pytest.mark.asyncio
async def test_each_fetch_issues_one_request() -> None:
    """Given a stop watch, when fetching twice, then the source is asked exactly twice for that stop."""
    source = FakeDepartureSource()
    fetcher = _fetcher(source)

    await fetcher.fetch(StopWatch(id="A", name="A"), 10)
    await fetcher.fetch(StopWatch(id="A", name="A"), 10)

    assert source.calls == ["A", "A"]


@pytest.mark.parametrize(
    ("minute", "time_from", "time_to", "expected"),
    [
        (600, None, None, True),
        (600, 600, None, True),
        (599, 600, None, False),
        (600, None, 600, True),
        (601, None, 600, False),
        (23 * 60 + 30, 23 * 60, 60, True),
        (30, 23 * 60, 60, True),
        (12 * 60, 23 * 60, 60, False),
    ],
)
def test_is_within_window(minute: int, time_from: int, time_to: int, expected: bool) -> None:
    """Given bounds (possibly wrapping midnight), when checking a minute, then inclusion is correct."""
    assert is_within_window(minute, time_from, time_to) is expected
