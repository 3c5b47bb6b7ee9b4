"""Utility for logging upstream API requests when VRR_LOG_REQUESTS is enabled."""

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


def should_log_requests() -> bool:
    """Check if request logging is enabled via VRR_LOG_REQUESTS environment variable."""
    return os.getenv("VRR_LOG_REQUESTS", "").lower() == "true"


def build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build full URL with query parameters."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def log_api_request(method: str, url: str, params: dict[str, Any] | None = None) -> None:
    """Log an upstream request at INFO if enabled, at DEBUG otherwise.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters (optional).
    """
    full_url = build_url_with_params(url, params)
    if should_log_requests():
        logger.info(f"API Request: {method} {full_url}")
    else:
        logger.debug(f"API Request: {method} {full_url}")
