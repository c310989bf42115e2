"""pysotamap - Player location tracking and map projection for Shroud of the Avatar."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysotamap")
except PackageNotFoundError:
    __version__ = "0+local"
from pysotamap.config import MapperConfig
from pysotamap.exceptions import MapFileError, MapperConfigError, ProjectionError, SotaMapError
from pysotamap.geometry import Extent, ExtentTracker, MapProjector
from pysotamap.maps import MapStore, append_item, parse_map_file
from pysotamap.models import AxisMapping, Coord3, CoordSystem, MapItem, MapRecord, PlayerState
from pysotamap.state.events import EventSource, PlayerEvent, PlayerField
from pysotamap.state.store import PlayerStateStore
from pysotamap.status import can_render, describe_missing_data
from pysotamap.watcher import PlayerStateWatcher

__all__ = [
    "__version__",
    "AxisMapping",
    "Coord3",
    "CoordSystem",
    "EventSource",
    "Extent",
    "ExtentTracker",
    "MapFileError",
    "MapItem",
    "MapProjector",
    "MapRecord",
    "MapStore",
    "MapperConfig",
    "MapperConfigError",
    "PlayerEvent",
    "PlayerField",
    "PlayerState",
    "PlayerStateStore",
    "PlayerStateWatcher",
    "ProjectionError",
    "SotaMapError",
    "append_item",
    "can_render",
    "describe_missing_data",
    "parse_map_file",
]
