"""Map axis conventions.

Game coordinates are ``(x, y, z)`` with ``y`` pointing up; the map plane is
formed by ``x`` and ``z``. Each :class:`CoordSystem` variant names the axis
that points north on screen first, then the other horizontal axis, then the
quadrant both positive directions face. For example ``XZ_NORTHWEST``::

           X
           |
           |
      Z----*

The canvas has ``x`` growing right and ``y`` growing down, so north is
the top edge.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal, NamedTuple, cast

Axis = Literal["x", "y", "z"]
AXES: tuple[Axis, ...] = ("x", "y", "z")


def check_axis(name: str) -> Axis:
    """Return *name* as an :data:`Axis`, or raise ``ValueError``."""
    if name not in AXES:
        raise ValueError(f"unknown axis: {name!r}")
    return cast(Axis, name)


class AxisMapping(NamedTuple):
    """How one game axis feeds one canvas axis.

    ``sign`` is ``+1`` when growing game values move along the growing
    canvas direction and ``-1`` otherwise. The anchored extent is the
    minimum for ``+1`` and the maximum for ``-1``, so the anchored map
    corner always lands on the canvas origin.
    """

    axis: Axis
    sign: int

    def anchor(self, minimum: float, maximum: float) -> float:
        return minimum if self.sign > 0 else maximum


class CoordSystem(StrEnum):
    XZ_NORTHWEST = "XZ_NorthWest"
    XZ_NORTHEAST = "XZ_NorthEast"
    ZX_NORTHEAST = "ZX_NorthEast"
    ZX_NORTHWEST = "ZX_NorthWest"

    @classmethod
    def default(cls) -> CoordSystem:
        return next(iter(cls))

    @classmethod
    def parse(cls, value: str) -> CoordSystem | None:
        """Case-insensitive lookup by value or member name; ``None`` if unknown."""
        wanted = value.strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        return None

    @property
    def canvas_x(self) -> AxisMapping:
        return _PROJECTIONS[self][0]

    @property
    def canvas_y(self) -> AxisMapping:
        return _PROJECTIONS[self][1]


# (canvas x, canvas y) per convention. North is always up, hence canvas y
# always runs against the north axis.
_PROJECTIONS: dict[CoordSystem, tuple[AxisMapping, AxisMapping]] = {
    CoordSystem.XZ_NORTHWEST: (AxisMapping("z", -1), AxisMapping("x", -1)),
    CoordSystem.XZ_NORTHEAST: (AxisMapping("z", +1), AxisMapping("x", -1)),
    CoordSystem.ZX_NORTHEAST: (AxisMapping("x", +1), AxisMapping("z", -1)),
    CoordSystem.ZX_NORTHWEST: (AxisMapping("x", -1), AxisMapping("z", -1)),
}
