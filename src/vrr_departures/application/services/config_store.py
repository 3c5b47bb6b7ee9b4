"""Config store: the single writer of the persisted board configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from vrr_departures.application.services.config_migrations import (
    UnsupportedConfigVersionError,
    detect_version,
    upgrade,
)
from vrr_departures.domain.models.board_config import CURRENT_CONFIG_VERSION, BoardConfig
from vrr_departures.domain.models.board_config_record import BoardConfigRecord

if TYPE_CHECKING:
    from vrr_departures.domain.contracts.key_value_store import KeyValueStore
    from vrr_departures.domain.models.stop_watch import StopWatch

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "vrr-departures:board-config"

_EDITABLE_STOP_FIELDS = frozenset({"id", "name", "label", "platforms", "time_from", "time_to"})

T = TypeVar("T")


class ConfigValidationError(ValueError):
    """A requested mutation would produce an invalid board configuration."""


def reorder(items: Sequence[T], from_index: int, to_index: int) -> tuple[T, ...]:
    """Move the element at ``from_index`` so it lands at ``to_index``.

    ``to_index`` is a position in the resulting sequence: moving forward shifts
    the elements in between left by one, moving backward shifts them right.

    Raises:
        IndexError: If either index is not a valid position in ``items``.
    """
    size = len(items)
    if not (0 <= from_index < size and 0 <= to_index < size):
        raise IndexError(f"reorder({from_index}, {to_index}) out of range for length {size}")
    result = list(items)
    if from_index != to_index:
        result.insert(to_index, result.pop(from_index))
    return tuple(result)


class ConfigStore:
    """Loads, migrates, validates and persists the board configuration.

    All mutations go through ``commit``: the candidate configuration is
    validated against the current schema, persisted, and only then becomes
    ``current``. Nothing else writes the persisted value.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        defaults: BoardConfig | None = None,
    ) -> None:
        """Initialize the config store.

        Args:
            store: Whole-value key-value persistence.
            key: Namespaced key the record is stored under.
            defaults: Built-in configuration used when nothing valid is persisted.
        """
        self._store = store
        self._key = key
        self._defaults = defaults if defaults is not None else BoardConfig()
        self._current = self._defaults

    @property
    def current(self) -> BoardConfig:
        """The configuration every surface renders from."""
        return self._current

    @property
    def defaults(self) -> BoardConfig:
        return self._defaults

    def load(self) -> BoardConfig:
        """Read, migrate and validate the persisted configuration.

        Falls back to the built-in defaults on absent, corrupt, schema-invalid
        or unsupported-version data. Never raises a parse error.
        """
        raw_text = self._store.get(self._key)
        if raw_text is None:
            logger.info(f"No persisted board config under '{self._key}', using defaults")
            self._current = self._defaults
            return self._current

        try:
            raw = json.loads(raw_text)
            if not isinstance(raw, dict):
                raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
            version = detect_version(raw)
            record = BoardConfigRecord.model_validate(upgrade(raw))
        except UnsupportedConfigVersionError as e:
            logger.warning(f"Resetting board config to defaults: {e}")
            self._current = self._defaults
            return self._current
        except (ValueError, ValidationError) as e:
            logger.warning(f"Persisted board config is invalid, using defaults: {e}")
            self._current = self._defaults
            return self._current

        self._current = record.to_domain()
        if version != CURRENT_CONFIG_VERSION:
            self.save(self._current)
            logger.info(
                f"Migrated board config from version {version} to {CURRENT_CONFIG_VERSION}"
            )
        logger.info(f"Loaded board config with {len(self._current.stops)} stop(s)")
        return self._current

    def save(self, config: BoardConfig) -> None:
        """Serialize and persist the configuration, replacing any prior value.

        Raises:
            ConfigValidationError: If the configuration violates the schema.
        """
        record = self._to_record(config)
        self._store.set(self._key, json.dumps(record.to_json(), ensure_ascii=False))
        logger.debug(f"Persisted board config ({len(config.stops)} stop(s))")

    def commit(self, config: BoardConfig) -> BoardConfig:
        """Validate, persist and publish a new configuration in one step."""
        self.save(config)
        self._current = config
        return config

    def reset(self) -> BoardConfig:
        """Drop the persisted configuration and fall back to the built-in defaults."""
        logger.info("Resetting board config to defaults")
        self._store.delete(self._key)
        self._current = self._defaults
        return self._current

    def add_stop(self, watch: StopWatch) -> BoardConfig:
        """Append a stop watch at the end of the list."""
        return self.commit(replace(self._current, stops=(*self._current.stops, watch)))

    def move(self, from_index: int, to_index: int) -> BoardConfig:
        """Move the stop watch at ``from_index`` so it lands at ``to_index``."""
        try:
            stops = reorder(self._current.stops, from_index, to_index)
        except IndexError as e:
            raise ConfigValidationError(str(e)) from e
        return self.commit(replace(self._current, stops=stops))

    def remove_stop(self, index: int) -> BoardConfig:
        """Remove the stop watch at the given position."""
        self._check_index(index)
        stops = self._current.stops
        return self.commit(replace(self._current, stops=stops[:index] + stops[index + 1 :]))

    def update_stop(self, index: int, **changes: Any) -> BoardConfig:
        """Edit fields of the stop watch at the given position."""
        self._check_index(index)
        unknown = set(changes) - _EDITABLE_STOP_FIELDS
        if unknown:
            raise ConfigValidationError(f"Unknown stop field(s): {sorted(unknown)}")
        if "platforms" in changes:
            changes["platforms"] = frozenset(changes["platforms"])
        stops = list(self._current.stops)
        stops[index] = replace(stops[index], **changes)
        return self.commit(replace(self._current, stops=tuple(stops)))

    def update_settings(
        self,
        refresh_interval_seconds: int | None = None,
        max_departures_per_stop: int | None = None,
    ) -> BoardConfig:
        """Change the global display settings."""
        config = self._current
        if refresh_interval_seconds is not None:
            config = replace(config, refresh_interval_seconds=refresh_interval_seconds)
        if max_departures_per_stop is not None:
            config = replace(config, max_departures_per_stop=max_departures_per_stop)
        return self.commit(config)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._current.stops):
            raise ConfigValidationError(f"No stop at position {index}")

    @staticmethod
    def _to_record(config: BoardConfig) -> BoardConfigRecord:
        try:
            return BoardConfigRecord.from_domain(config)
        except ValidationError as e:
            raise ConfigValidationError(str(e)) from e
