"""Data models for maps and player state."""

from pysotamap.models.coord_system import AxisMapping, CoordSystem
from pysotamap.models.coords import Coord3, MapItem
from pysotamap.models.map_record import MapRecord
from pysotamap.models.player import PlayerState

__all__ = [
    "AxisMapping",
    "Coord3",
    "CoordSystem",
    "MapItem",
    "MapRecord",
    "PlayerState",
]
