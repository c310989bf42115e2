"""Internal constants shared across the library."""

import re

MAP_COORD_SYS_DIRECTIVE = "mapcoordsys"

# Margin kept on every canvas edge, as a percentage of that canvas dimension.
CANVAS_MARGIN_WIDTH_PERCENT = 5.0
CANVAS_MARGIN_HEIGHT_PERCENT = 5.0

DEFAULT_MAP_FILE_PATTERN = "*.csv"
DEFAULT_LOG_FILE_PATTERN = "SotAChatLog_*.txt"
DEFAULT_SNAPSHOT_FILENAME = "CurrentPlayerData.txt"
DEFAULT_POLL_INTERVAL = 1.0

# Bracketed chat-log timestamps, tried in order.
DEFAULT_TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
)

# ------------------------------------------------------------------
# Chat log / snapshot line patterns
# ------------------------------------------------------------------

# [5/22/2016 10:58:32 PM] Entering Soltown from Novia
AREA_CHANGE_RE = re.compile(r"^\[(?P<ts>[^\]]+)\]\s+Entering\s+(?P<new_area>.+?)\s+from\s+(?P<old_area>.+?)\s*$")

# [5/22/2016 10:58:32 PM] Area: Soltown (Novia_R1_City_Soltown) Loc: (-15.7, 28.0, 23.2)
LOCATION_REPORT_RE = re.compile(
    r"^\[(?P<ts>[^\]]+)\]\s+Area:\s+(?P<area>.+?)\s+\((?P<map>[^()]+)\)\s+"
    r"Loc:\s+\((?P<x>[^,()]+),\s*(?P<y>[^,()]+),\s*(?P<z>[^,()]+)\)"
)

# PlayerLoc: -15.7, 28.0, 23.2
SNAPSHOT_LOC_RE = re.compile(r"PlayerLoc:\s*(?P<x>[^,\s]+)\s*,\s*(?P<y>[^,\s]+)\s*,\s*(?P<z>[^,\s]+)")
