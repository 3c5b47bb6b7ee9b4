"""Tests for API request logger."""

from unittest.mock import patch

import pytest

from vrr_departures.adapters.vrr_api.api_request_logger import (
    build_url_with_params,
    log_api_request,
    should_log_requests,
)


class TestShouldLogRequests:
    """Tests for should_log_requests function."""

    def test_when_env_not_set_then_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given VRR_LOG_REQUESTS not set, when checking, then returns False."""
        monkeypatch.delenv("VRR_LOG_REQUESTS", raising=False)

        assert should_log_requests() is False

    @pytest.mark.parametrize("value", ["true", "True", "TRUE"])
    def test_when_env_set_to_true_then_returns_true(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        """Given VRR_LOG_REQUESTS=true in any case, when checking, then returns True."""
        monkeypatch.setenv("VRR_LOG_REQUESTS", value)

        assert should_log_requests() is True

    def test_when_env_set_to_false_then_returns_false(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Given VRR_LOG_REQUESTS=false, when checking, then returns False."""
        monkeypatch.setenv("VRR_LOG_REQUESTS", "false")

        assert should_log_requests() is False


def test_build_url_sorts_params() -> None:
    """Given unordered params, when building the URL, then they are appended sorted."""
    assert (
        build_url_with_params("https://efa.vrr.de/vrr/XSLT_DM_REQUEST", {"b": 2, "a": 1})
        == "https://efa.vrr.de/vrr/XSLT_DM_REQUEST?a=1&b=2"
    )


def test_build_url_appends_to_existing_query() -> None:
    """Given a URL with a query string, when building, then params are appended with &."""
    assert build_url_with_params("https://x/api?x=1", {"y": 2}) == "https://x/api?x=1&y=2"
    assert build_url_with_params("https://x/api", None) == "https://x/api"


class TestLogApiRequest:
    """Tests for log_api_request function."""

    @patch("vrr_departures.adapters.vrr_api.api_request_logger.should_log_requests")
    @patch("vrr_departures.adapters.vrr_api.api_request_logger.logger")
    def test_when_logging_disabled_then_logs_at_debug(
        self, mock_logger: object, mock_should_log: object
    ) -> None:
        """Given logging disabled, when calling log_api_request, then only debug is used."""
        mock_should_log.return_value = False

        log_api_request("GET", "https://example.com/api")

        mock_logger.info.assert_not_called()
        mock_logger.debug.assert_called_once()

    @patch("vrr_departures.adapters.vrr_api.api_request_logger.should_log_requests")
    @patch("vrr_departures.adapters.vrr_api.api_request_logger.logger")
    def test_when_logging_enabled_with_params_then_logs_full_url(
        self, mock_logger: object, mock_should_log: object
    ) -> None:
        """Given logging enabled with params, when calling, then logs URL with params."""
        mock_should_log.return_value = True

        log_api_request("GET", "https://example.com/api", params={"name_dm": "20009289"})

        mock_logger.info.assert_called_once()
        call_args = mock_logger.info.call_args[0][0]
        assert "GET https://example.com/api?name_dm=20009289" in call_args
