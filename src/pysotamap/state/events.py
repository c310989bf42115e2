"""Normalized candidate updates.

Both ingestion paths (chat log, snapshot file) convert what they read
into these events. Only the state/store layer is allowed to merge them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pysotamap.models.coords import Coord3


class EventSource(StrEnum):
    CHAT_LOG = "chat_log"
    SNAPSHOT = "snapshot"


class PlayerField(StrEnum):
    AREA_NAME = "area_name"
    MAP_NAME = "map_name"
    LOC = "loc"


class PlayerEvent(BaseModel):
    """Candidate values for some player fields, all claimed at ``timestamp``.

    A key present in ``data`` is a claim for that field; a ``None`` value
    claims the field is unknown (e.g. the map name after an area change).
    Keys absent from ``data`` say nothing about that field.
    """

    model_config = ConfigDict(frozen=True)

    source: EventSource
    timestamp: datetime
    data: dict[PlayerField, Any] = Field(default_factory=dict)

    @field_validator("timestamp")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("data")
    @classmethod
    def _check_value_types(cls, value: dict[PlayerField, Any]) -> dict[PlayerField, Any]:
        for player_field, candidate in value.items():
            if candidate is None:
                continue
            if player_field == PlayerField.LOC:
                if not isinstance(candidate, Coord3):
                    raise ValueError("loc must be a Coord3")
            elif not isinstance(candidate, str):
                raise ValueError(f"{player_field.value} must be a string")
        return value
