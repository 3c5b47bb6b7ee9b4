"""Classification of local network exceptions into relay error types."""

from __future__ import annotations

import asyncio
import errno
import socket
from dataclasses import dataclass

import aiohttp

from vrr_departures.domain.models.fetch_failure import ErrorType


@dataclass(frozen=True)
class ClassifiedError:
    """An exception reduced to its error type, user message and OS-level code."""

    error_type: ErrorType
    message: str
    code: str | None


def _os_error_of(error: BaseException) -> OSError | None:
    """Find the OS-level error behind an aiohttp or plain exception."""
    os_error = getattr(error, "os_error", None)
    if isinstance(os_error, OSError):
        return os_error
    cause = error.__cause__ or error.__context__
    if isinstance(cause, OSError):
        return cause
    if isinstance(error, OSError):
        return error
    return None


def _error_code(os_error: OSError | None) -> str | None:
    if os_error is None or os_error.errno is None:
        return None
    if isinstance(os_error, socket.gaierror):
        return {socket.EAI_NONAME: "EAI_NONAME", socket.EAI_AGAIN: "EAI_AGAIN"}.get(
            os_error.errno, f"EAI_{os_error.errno}"
        )
    return errno.errorcode.get(os_error.errno)


def classify_exception(error: BaseException, service: str = "VRR API") -> ClassifiedError:
    """Map an exception raised while contacting a service to a classified error."""
    os_error = _os_error_of(error)
    code = _error_code(os_error)

    if isinstance(os_error, socket.gaierror):
        return ClassifiedError(
            ErrorType.DNS_ERROR,
            f"Cannot resolve {service} hostname - check internet connection",
            code,
        )
    if isinstance(os_error, ConnectionRefusedError):
        return ClassifiedError(
            ErrorType.CONNECTION_REFUSED, f"Connection to {service} refused", code or "ECONNREFUSED"
        )
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return ClassifiedError(
            ErrorType.TIMEOUT, f"Connection to {service} timed out", code or "ETIMEDOUT"
        )
    if isinstance(error, (aiohttp.ClientError, OSError)):
        return ClassifiedError(
            ErrorType.NETWORK_ERROR, f"Network error connecting to {service}", code
        )
    return ClassifiedError(ErrorType.UNKNOWN_ERROR, str(error) or type(error).__name__, code)
