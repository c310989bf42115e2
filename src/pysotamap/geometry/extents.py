"""Running min/max accumulators."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from pysotamap.models.coord_system import check_axis
from pysotamap.models.coords import Coord3


@dataclass(slots=True)
class Extent:
    """Running minimum and maximum of a stream of scalars.

    Both bounds start unset. The result does not depend on input order.
    """

    minimum: float | None = None
    maximum: float | None = None

    def add(self, value: float) -> None:
        if self.minimum is None or value < self.minimum:
            self.minimum = value
        if self.maximum is None or value > self.maximum:
            self.maximum = value

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            self.add(value)

    @property
    def is_set(self) -> bool:
        return self.minimum is not None and self.maximum is not None

    @property
    def span(self) -> float:
        if self.minimum is None or self.maximum is None:
            return 0.0
        return self.maximum - self.minimum


@dataclass(slots=True)
class ExtentTracker:
    """Component-wise :class:`Extent` over a stream of :class:`Coord3`."""

    x: Extent = field(default_factory=Extent)
    y: Extent = field(default_factory=Extent)
    z: Extent = field(default_factory=Extent)

    @classmethod
    def of(cls, coords: Iterable[Coord3]) -> ExtentTracker:
        tracker = cls()
        tracker.extend(coords)
        return tracker

    @classmethod
    def from_bounds(cls, minimum: Coord3 | None, maximum: Coord3 | None) -> ExtentTracker:
        """Seed a tracker with previously computed bounds."""
        tracker = cls()
        for coord in (minimum, maximum):
            if coord is not None:
                tracker.add(coord)
        return tracker

    def add(self, coord: Coord3) -> None:
        self.x.add(coord.x)
        self.y.add(coord.y)
        self.z.add(coord.z)

    def extend(self, coords: Iterable[Coord3]) -> None:
        for coord in coords:
            self.add(coord)

    def axis(self, name: str) -> Extent:
        extent: Extent = getattr(self, check_axis(name))
        return extent

    @property
    def is_set(self) -> bool:
        return self.x.is_set and self.y.is_set and self.z.is_set

    @property
    def min_coord(self) -> Coord3 | None:
        if not self.is_set:
            return None
        return Coord3(x=self.x.minimum, y=self.y.minimum, z=self.z.minimum)  # type: ignore[arg-type]

    @property
    def max_coord(self) -> Coord3 | None:
        if not self.is_set:
            return None
        return Coord3(x=self.x.maximum, y=self.y.maximum, z=self.z.maximum)  # type: ignore[arg-type]
