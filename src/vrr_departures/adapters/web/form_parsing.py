"""Helpers for reading LiveView event payloads.

Form submits arrive as ``{name: [value, ...]}``, ``phx-value-*`` clicks as
``{name: value}``.
"""

from typing import Any

from vrr_departures.application.services.config_store import ConfigValidationError


def field(payload: dict[str, Any], name: str, default: str = "") -> str:
    """Single string value of a payload field."""
    value = payload.get(name, default)
    if isinstance(value, list):
        value = value[0] if value else default
    return str(value).strip()


def parse_index(payload: dict[str, Any], name: str = "index") -> int:
    try:
        return int(field(payload, name))
    except ValueError as e:
        raise ConfigValidationError(f"Invalid {name}: {field(payload, name)!r}") from e


def parse_optional_int(payload: dict[str, Any], name: str) -> int | None:
    raw = field(payload, name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigValidationError(f"{name} must be a whole number, got {raw!r}") from e


def parse_time_of_day(raw: str) -> int | None:
    """Parse ``HH:MM`` into a minute of day; empty means unset."""
    raw = raw.strip()
    if not raw:
        return None
    hours, sep, minutes = raw.partition(":")
    try:
        if not sep:
            raise ValueError
        hour, minute = int(hours), int(minutes)
    except ValueError as e:
        raise ConfigValidationError(f"Time must be HH:MM, got {raw!r}") from e
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ConfigValidationError(f"Time out of range: {raw!r}")
    return hour * 60 + minute


def parse_platforms(raw: str) -> frozenset[str]:
    """Comma-separated platform list; blanks are dropped."""
    return frozenset(p.strip() for p in raw.split(",") if p.strip())


def parse_stop_fields(payload: dict[str, Any]) -> dict[str, Any]:
    """Editable stop watch fields from a settings form."""
    return {
        "name": field(payload, "name"),
        "label": field(payload, "label") or None,
        "platforms": parse_platforms(field(payload, "platforms")),
        "time_from": parse_time_of_day(field(payload, "time_from")),
        "time_to": parse_time_of_day(field(payload, "time_to")),
    }
