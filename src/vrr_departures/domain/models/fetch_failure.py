"""Classified fetch failure domain model."""

from dataclasses import dataclass
from enum import StrEnum


class ErrorType(StrEnum):
    """Network and upstream error classification shared by relay and client."""

    DNS_ERROR = "DNS_ERROR"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    VRR_API_ERROR = "VRR_API_ERROR"
    MISSING_PARAMETER = "MISSING_PARAMETER"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass(frozen=True)
class FetchFailure:
    """Typed result of a failed departure fetch."""

    error_type: ErrorType
    message: str
    status: int | None = None


class RelayError(Exception):
    """Raised by departure sources when the relay reports or hits a failure."""

    def __init__(self, failure: FetchFailure) -> None:
        super().__init__(failure.message)
        self.failure = failure
