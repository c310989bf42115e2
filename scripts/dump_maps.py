#!/usr/bin/env python3
"""Dump every map the map store can load.

Prints each map's coordinate system, item count and extents, and
optionally every item, so broken or empty map files are easy to spot.

Usage
-----
::

    python scripts/dump_maps.py --map-dir data/maps
    python scripts/dump_maps.py --map-dir data/maps --items --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysotamap import MapperConfig, MapRecord, MapStore  # noqa: E402


def _record_to_dict(record: MapRecord, *, with_items: bool) -> dict[str, Any]:
    data = record.model_dump(mode="json", exclude={"items"} if not with_items else None)
    data["item_count"] = len(record.items)
    return data


def main() -> int:
    parser = argparse.ArgumentParser(description="Load all map files and print a summary")
    parser.add_argument("--map-dir", type=Path, help="Map directory (default: $SOTAMAP_MAP_DIR or data/maps)")
    parser.add_argument("--pattern", help="Map file glob (default: *.csv)")
    parser.add_argument("--items", action="store_true", help="Also print every item")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.map_dir is not None:
        overrides["map_dir"] = args.map_dir
    if args.pattern:
        overrides["map_file_pattern"] = args.pattern
    config = MapperConfig.from_env(**overrides)

    store = MapStore(config)
    store.load()
    records = sorted(store.maps.values(), key=lambda r: r.name.lower())

    if args.json_mode:
        print(json.dumps([_record_to_dict(r, with_items=args.items) for r in records], indent=2))
        return 0

    if not records:
        print(f"No maps found in {config.map_dir}")
        return 1

    for record in records:
        if args.items:
            print(record)
            continue
        extents = f"{record.min_extent} .. {record.max_extent}" if record.has_extents else "no data"
        print(f"{record.name:<40} {record.coord_system.value:<14} {len(record.items):>5} items  {extents}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
