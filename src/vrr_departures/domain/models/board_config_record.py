"""Persisted (current-schema) board configuration record."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vrr_departures.domain.models.board_config import (
    CURRENT_CONFIG_VERSION,
    MIN_REFRESH_INTERVAL_SECONDS,
    BoardConfig,
)
from vrr_departures.domain.models.stop_watch import MINUTES_PER_DAY, StopWatch


class StopWatchRecord(BaseModel):
    """Wire shape of one watched stop: ``{id,name,label,platforms[],timeFrom,timeTo}``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str = ""
    label: str | None = None
    platforms: list[str] = Field(default_factory=list)
    time_from: int | None = Field(default=None, alias="timeFrom", ge=0, lt=MINUTES_PER_DAY)
    time_to: int | None = Field(default=None, alias="timeTo", ge=0, lt=MINUTES_PER_DAY)

    @field_validator("platforms")
    @classmethod
    def normalize_platforms(cls, v: list[str]) -> list[str]:
        """Strip blanks and duplicates, keep a stable sorted order."""
        return sorted({str(p).strip() for p in v if str(p).strip()})

    @classmethod
    def from_domain(cls, watch: StopWatch) -> StopWatchRecord:
        return cls(
            id=watch.id,
            name=watch.name,
            label=watch.label,
            platforms=sorted(watch.platforms),
            time_from=watch.time_from,
            time_to=watch.time_to,
        )

    def to_domain(self) -> StopWatch:
        return StopWatch(
            id=self.id,
            name=self.name,
            label=self.label,
            platforms=frozenset(self.platforms),
            time_from=self.time_from,
            time_to=self.time_to,
        )


class BoardConfigRecord(BaseModel):
    """Wire shape of the whole persisted board configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    version: int
    stops: list[StopWatchRecord] = Field(default_factory=list)
    refresh_interval_seconds: int = Field(
        alias="refreshIntervalSeconds", ge=MIN_REFRESH_INTERVAL_SECONDS
    )
    max_departures_per_stop: int = Field(alias="maxDeparturesPerStop", ge=1)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: int) -> int:
        """Only the current schema version is accepted here; older ones migrate first."""
        if v != CURRENT_CONFIG_VERSION:
            raise ValueError(f"expected version {CURRENT_CONFIG_VERSION}, got {v}")
        return v

    @classmethod
    def from_domain(cls, config: BoardConfig) -> BoardConfigRecord:
        return cls(
            version=CURRENT_CONFIG_VERSION,
            stops=[StopWatchRecord.from_domain(s) for s in config.stops],
            refresh_interval_seconds=config.refresh_interval_seconds,
            max_departures_per_stop=config.max_departures_per_stop,
        )

    def to_domain(self) -> BoardConfig:
        return BoardConfig(
            stops=tuple(s.to_domain() for s in self.stops),
            refresh_interval_seconds=self.refresh_interval_seconds,
            max_departures_per_stop=self.max_departures_per_stop,
            version=self.version,
        )

    def to_json(self) -> dict[str, Any]:
        """Serialize with the persisted (camelCase) field names."""
        return self.model_dump(by_alias=True)
