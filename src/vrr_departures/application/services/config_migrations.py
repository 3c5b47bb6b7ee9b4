"""Versioned migration chain for the persisted board configuration.

Every schema generation has exactly one step function that upgrades a raw
record from version N to N+1. ``upgrade`` applies the steps strictly one at a
time, so any older record reaches the current version without pairwise
converters.

Schema generations:

* v1 (untagged): ``{"stops": [{"id", "name"?}], "refresh"}``
* v2: ``{"version": 2, "stops": [{"id", "name", "label", "platform"}],
  "refreshIntervalSeconds"}``
* v3: ``{"version": 3, "stops": [{"id", "name", "label", "platforms",
  "timeFrom", "timeTo"}], "refreshIntervalSeconds", "maxDeparturesPerStop"}``
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from vrr_departures.domain.models.board_config import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_MAX_DEPARTURES_PER_STOP,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
)

logger = logging.getLogger(__name__)

LEGACY_UNTAGGED_VERSION = 1

RawConfig = dict[str, Any]


class UnsupportedConfigVersionError(ValueError):
    """The record carries a version tag no migration path exists for."""


def detect_version(raw: RawConfig) -> int:
    """Return the schema version a raw record declares.

    Records without a ``version`` key predate versioning and are treated as v1.

    Raises:
        UnsupportedConfigVersionError: If the tag is not a known version.
    """
    if "version" not in raw:
        return LEGACY_UNTAGGED_VERSION
    version = raw["version"]
    if isinstance(version, bool) or not isinstance(version, int):
        raise UnsupportedConfigVersionError(f"Unrecognized config version tag: {version!r}")
    if version < LEGACY_UNTAGGED_VERSION or version > CURRENT_CONFIG_VERSION:
        raise UnsupportedConfigVersionError(f"Unrecognized config version: {version}")
    return version


def _stop_entries(raw: RawConfig) -> list[dict[str, Any]]:
    stops = raw.get("stops", [])
    if not isinstance(stops, list):
        raise ValueError("config 'stops' must be a list")
    entries = []
    for stop in stops:
        if not isinstance(stop, dict):
            logger.warning(f"Dropping malformed stop entry during migration: {stop!r}")
            continue
        entries.append(stop)
    return entries


def _migrate_v1_to_v2(raw: RawConfig) -> RawConfig:
    """Rename ``refresh`` and give every stop a name, label and single platform."""
    result = {k: v for k, v in raw.items() if k not in ("refresh", "stops", "version")}
    result["version"] = 2
    result["refreshIntervalSeconds"] = raw.get("refresh", DEFAULT_REFRESH_INTERVAL_SECONDS)
    stops = []
    for stop in _stop_entries(raw):
        migrated = dict(stop)
        stop_id = stop.get("id")
        migrated.setdefault("name", stop_id)
        migrated.setdefault("label", None)
        migrated.setdefault("platform", None)
        stops.append(migrated)
    result["stops"] = stops
    return result


def _migrate_v2_to_v3(raw: RawConfig) -> RawConfig:
    """Turn the single platform into a set and add time window and departure limit."""
    result = {k: v for k, v in raw.items() if k != "stops"}
    result["version"] = 3
    result.setdefault("maxDeparturesPerStop", DEFAULT_MAX_DEPARTURES_PER_STOP)
    stops = []
    for stop in _stop_entries(raw):
        migrated = {k: v for k, v in stop.items() if k != "platform"}
        platform = stop.get("platform")
        if platform is None or str(platform).strip() == "":
            migrated["platforms"] = []
        else:
            migrated["platforms"] = [str(platform).strip()]
        migrated.setdefault("timeFrom", None)
        migrated.setdefault("timeTo", None)
        stops.append(migrated)
    result["stops"] = stops
    return result


MIGRATIONS: dict[int, Callable[[RawConfig], RawConfig]] = {
    1: _migrate_v1_to_v2,
    2: _migrate_v2_to_v3,
}


def migrate(raw: RawConfig, from_version: int) -> RawConfig:
    """Apply the single step from ``from_version`` to ``from_version + 1``.

    Pure: the input record is never modified. A record already at the current
    version comes back as an equal copy.
    """
    if from_version == CURRENT_CONFIG_VERSION:
        return copy.deepcopy(raw)
    step = MIGRATIONS.get(from_version)
    if step is None:
        raise UnsupportedConfigVersionError(f"No migration from version {from_version}")
    return step(copy.deepcopy(raw))


def upgrade(raw: RawConfig) -> RawConfig:
    """Migrate a raw record of any supported version to the current version.

    A record that is already current is returned unchanged.
    """
    version = detect_version(raw)
    current = raw
    while version < CURRENT_CONFIG_VERSION:
        logger.info(f"Migrating board config from version {version} to {version + 1}")
        current = migrate(current, version)
        version += 1
    return current
