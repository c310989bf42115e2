"""Map record model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pysotamap.models.coord_system import CoordSystem
from pysotamap.models.coords import Coord3, MapItem


class MapRecord(BaseModel):
    """One map loaded from a map-definition file.

    ``min_extent`` and ``max_extent`` are both set or both ``None``; they
    are ``None`` exactly when the map has no items.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    coord_system: CoordSystem = Field(default_factory=CoordSystem.default)
    items: list[MapItem] = Field(default_factory=list)
    min_extent: Coord3 | None = None
    max_extent: Coord3 | None = None
    source_path: Path | None = None

    @model_validator(mode="after")
    def _check_extents_paired(self) -> MapRecord:
        if (self.min_extent is None) != (self.max_extent is None):
            raise ValueError("min_extent and max_extent must both be set or both be None")
        return self

    @property
    def has_extents(self) -> bool:
        return self.min_extent is not None and self.max_extent is not None

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.name.upper()

    def __str__(self) -> str:
        lines = [
            f"Name={self.name}",
            f"   CoordSys: {self.coord_system.value}",
            f"   MinLoc: {self.min_extent if self.min_extent is not None else 'null'}",
            f"   MaxLoc: {self.max_extent if self.max_extent is not None else 'null'}",
        ]
        lines.extend(f"   {item}" for item in self.items)
        return "\n".join(lines)
