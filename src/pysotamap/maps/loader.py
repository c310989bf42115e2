"""Map-definition file parsing and appending.

A map file is plain comma-separated text, one record per line::

    MapCoordSys,ZX_NorthEast
    Bank,12.5,30,-4
    Moongate,-80,31.2,16

* two fields whose first is ``MapCoordSys`` select the axis convention
  (unknown values leave the current one in place);
* four fields are an item: name, x, y, z;
* everything else is ignored.

The map name is the file name without its extension, which is what the
game reports as the map in ``/loc`` output.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pysotamap._constants import MAP_COORD_SYS_DIRECTIVE
from pysotamap.exceptions import MapFileError
from pysotamap.geometry.extents import ExtentTracker
from pysotamap.ingestion.normalize import parse_coord
from pysotamap.models.coord_system import CoordSystem
from pysotamap.models.coords import MapItem
from pysotamap.models.map_record import MapRecord

_logger = logging.getLogger(__name__)

_MAX_ITEMS_TO_LOG = 3


def _clean_name(raw: str) -> str:
    name = raw.strip()
    if len(name) >= 2 and name[0] == name[-1] == '"':
        name = name[1:-1].strip()
    return name


def parse_line(line: str) -> CoordSystem | MapItem | None:
    """Parse one map file line into a directive value, an item, or nothing."""
    if not line.strip():
        return None
    toks = line.split(",")

    if len(toks) == 2:
        if toks[0].strip().lower() != MAP_COORD_SYS_DIRECTIVE:
            return None
        coord_system = CoordSystem.parse(toks[1])
        if coord_system is None:
            _logger.debug("Ignoring unknown coordinate system %r", toks[1].strip())
        return coord_system

    if len(toks) == 4:
        coord = parse_coord(toks[1], toks[2], toks[3])
        if coord is None:
            return None
        name = _clean_name(toks[0])
        if not name:
            return None
        return MapItem(name=name, coord=coord)

    return None


def parse_map_file(path: Path) -> MapRecord:
    """Load one map file.

    Malformed lines are skipped. A file without any valid item still
    produces a record, with no extents.

    Raises
    ------
    MapFileError
        If the file cannot be read.
    """
    _logger.debug("LOAD: %s", path)
    try:
        # Undecodable bytes only spoil the item line they sit on.
        text = path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        raise MapFileError(f"Cannot read map file {path}: {exc}", path=path) from exc

    coord_system = CoordSystem.default()
    items: list[MapItem] = []

    for line in text.splitlines():
        parsed = parse_line(line)
        if parsed is None:
            continue
        if isinstance(parsed, CoordSystem):
            coord_system = parsed
            _logger.debug("coord sys specified: %s", coord_system.value)
            continue

        items.append(parsed)
        if len(items) <= _MAX_ITEMS_TO_LOG:
            _logger.debug("loaded map item: %s", parsed)
        elif len(items) == _MAX_ITEMS_TO_LOG + 1:
            _logger.debug("... remaining items not logged")

    extents = ExtentTracker.of(item.coord for item in items)
    record = MapRecord(
        name=path.stem,
        coord_system=coord_system,
        items=items,
        min_extent=extents.min_coord,
        max_extent=extents.max_coord,
        source_path=path,
    )
    _logger.debug(
        "loaded %d map items from %s (min=%s, max=%s)",
        len(items),
        path.name,
        record.min_extent,
        record.max_extent,
    )
    return record


def format_item_line(item: MapItem) -> str:
    if "," in item.name:
        raise ValueError(f"map item name must not contain commas: {item.name!r}")
    coord = item.coord
    return f"{item.name},{coord.x!r},{coord.y!r},{coord.z!r}"


def _needs_leading_newline(path: Path) -> bool:
    try:
        with path.open("rb") as handle:
            handle.seek(0, 2)
            if handle.tell() == 0:
                return False
            handle.seek(-1, 2)
            return handle.read(1) not in (b"\n", b"\r")
    except FileNotFoundError:
        return False


def append_item(record: MapRecord, item: MapItem) -> bool:
    """Persist *item* to the record's file, then add it to the record.

    The in-memory record is only touched once the file write succeeded.
    Returns whether the item was added.

    Raises
    ------
    ValueError
        If the item name cannot be represented in a map file line.
    """
    line = format_item_line(item)
    if record.source_path is None:
        _logger.warning("Map %s has no backing file; not adding %s", record.name, item)
        return False

    try:
        prefix = "\n" if _needs_leading_newline(record.source_path) else ""
        with record.source_path.open("a", encoding="utf-8") as handle:
            handle.write(f"{prefix}{line}\n")
    except OSError:
        _logger.warning("Failed to append %s to %s", item, record.source_path, exc_info=True)
        return False

    extents = ExtentTracker.from_bounds(record.min_extent, record.max_extent)
    extents.add(item.coord)
    items = [*record.items, item]
    # Widened extents still bound the old items, so publish them before the new list.
    record.min_extent = extents.min_coord
    record.max_extent = extents.max_coord
    record.items = items
    _logger.info("Added map item %s to %s", item, record.name)
    return True
