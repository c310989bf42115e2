"""Map to canvas coordinate conversion.

Fits all map data, plus any extra points such as the player marker, into
a rectangular canvas while preserving the aspect ratio of the data. A
margin of a fixed percentage is kept free on every edge.

Canvas coordinates grow right (x) and down (y).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from pysotamap._constants import CANVAS_MARGIN_HEIGHT_PERCENT, CANVAS_MARGIN_WIDTH_PERCENT
from pysotamap.exceptions import ProjectionError
from pysotamap.geometry.extents import ExtentTracker
from pysotamap.models.coords import Coord3
from pysotamap.models.map_record import MapRecord

_logger = logging.getLogger(__name__)


def _usable(dimension: float | None) -> bool:
    return dimension is not None and math.isfinite(dimension) and dimension >= 0


class MapProjector:
    """Project game coordinates of one map onto a canvas.

    Usage::

        projector = MapProjector(map_record, width, height, [player.loc])
        if projector.init():
            canvas_x, canvas_y = projector.convert_map_to_canvas(item.coord)
    """

    def __init__(
        self,
        map_record: MapRecord | None,
        width: float | None,
        height: float | None,
        other_points: Iterable[Coord3 | None] | None = None,
    ) -> None:
        self._map = map_record
        self._width = width
        self._height = height
        self._other_points = [p for p in (other_points or ()) if p is not None]

        # Margins are available even when init() fails so "no data" text
        # can be laid out with the same insets.
        self.margin_x = (width or 0.0) * (CANVAS_MARGIN_WIDTH_PERCENT / 100.0)
        self.margin_y = (height or 0.0) * (CANVAS_MARGIN_HEIGHT_PERCENT / 100.0)

        self._initialized = False
        self._scale = 0.0
        self._anchor_x = 0.0
        self._anchor_y = 0.0

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def center(self) -> tuple[float, float]:
        return (self._width or 0.0) / 2.0, (self._height or 0.0) / 2.0

    def init(self) -> bool:
        """Compute scale and anchor; ``False`` when there is nothing to project onto."""
        self._initialized = False
        if self._map is None or not self._map.has_extents:
            return False
        if not (_usable(self._width) and _usable(self._height)):
            return False
        assert self._width is not None and self._height is not None  # noqa: S101

        extents = ExtentTracker.from_bounds(self._map.min_extent, self._map.max_extent)
        extents.extend(self._other_points)

        mapping_x = self._map.coord_system.canvas_x
        mapping_y = self._map.coord_system.canvas_y
        extent_x = extents.axis(mapping_x.axis)
        extent_y = extents.axis(mapping_y.axis)

        map_width = extent_x.span
        map_height = extent_y.span

        render_width = self._width - (self.margin_x * 2.0)
        render_height = self._height - (self.margin_y * 2.0)

        width_scale = render_width / map_width if map_width != 0 else 0.0
        height_scale = render_height / map_height if map_height != 0 else 0.0
        self._scale = min(width_scale, height_scale)

        assert extent_x.minimum is not None and extent_x.maximum is not None  # noqa: S101
        assert extent_y.minimum is not None and extent_y.maximum is not None  # noqa: S101
        self._anchor_x = mapping_x.anchor(extent_x.minimum, extent_x.maximum)
        self._anchor_y = mapping_y.anchor(extent_y.minimum, extent_y.maximum)

        if self._scale == 0:
            _logger.debug("Degenerate extents for map %s; projecting to canvas center", self._map.name)

        self._initialized = True
        return True

    def convert_map_to_canvas(self, point: Coord3) -> tuple[float, float]:
        """Return the canvas ``(x, y)`` for a game-space point.

        Raises
        ------
        ProjectionError
            If :meth:`init` has not succeeded.
        """
        if not self._initialized or self._map is None:
            raise ProjectionError("Projector not initialized. Call init() and check its result first.")

        if self._scale == 0:
            return self.center

        mapping_x = self._map.coord_system.canvas_x
        mapping_y = self._map.coord_system.canvas_y

        canvas_x = mapping_x.sign * (point.component(mapping_x.axis) - self._anchor_x) * self._scale
        canvas_y = mapping_y.sign * (point.component(mapping_y.axis) - self._anchor_y) * self._scale

        return canvas_x + self.margin_x, canvas_y + self.margin_y
