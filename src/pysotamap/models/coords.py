"""Game-space coordinate and map item models."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, field_validator

from pysotamap.models.coord_system import check_axis


class Coord3(BaseModel):
    """A point in game space.

    Equality is exact component-wise comparison.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float

    @field_validator("x", "y", "z")
    @classmethod
    def _require_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("coordinate components must be finite")
        return value

    @classmethod
    def of(cls, x: float, y: float, z: float) -> Coord3:
        return cls(x=x, y=y, z=z)

    def component(self, axis: str) -> float:
        """Return the value of the named axis (``"x"``, ``"y"`` or ``"z"``)."""
        value: float = getattr(self, check_axis(axis))
        return value

    def __str__(self) -> str:
        return f"{self.x:g}, {self.y:g}, {self.z:g}"


class MapItem(BaseModel):
    """A single named point on a map. Names are free text and not unique."""

    model_config = ConfigDict(frozen=True)

    name: str
    coord: Coord3

    def __str__(self) -> str:
        return f"Name={self.name}, Coord={self.coord}"
