"""Map file loading and lookup."""

from pysotamap.maps.loader import append_item, parse_line, parse_map_file
from pysotamap.maps.store import MapStore

__all__ = ["MapStore", "append_item", "parse_line", "parse_map_file"]
