"""Collection of loaded maps with case-insensitive lookup."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from pysotamap.config import MapperConfig
from pysotamap.exceptions import MapFileError
from pysotamap.maps.loader import append_item, parse_map_file
from pysotamap.models.coords import MapItem
from pysotamap.models.map_record import MapRecord
from pysotamap.models.player import PlayerState

_logger = logging.getLogger(__name__)


class MapStore:
    """Loads every map file in the configured directory.

    :meth:`load` builds a complete new collection and then swaps it in,
    so readers see either the old or the new collection, never a partial
    one.
    """

    def __init__(self, config: MapperConfig) -> None:
        self._config = config
        self._maps: Mapping[str, MapRecord] = MappingProxyType({})

    @property
    def maps(self) -> Mapping[str, MapRecord]:
        """Loaded maps keyed by upper-cased map name."""
        return self._maps

    def __len__(self) -> int:
        return len(self._maps)

    def load(self) -> int:
        """(Re)load all map files; return the number of maps loaded."""
        loaded: dict[str, MapRecord] = {}
        map_dir = self._config.map_dir
        if not map_dir.is_dir():
            _logger.warning("Map directory %s does not exist", map_dir)
        else:
            for map_file in sorted(map_dir.glob(self._config.map_file_pattern)):
                if not map_file.is_file():
                    continue
                try:
                    record = parse_map_file(map_file)
                except MapFileError as exc:
                    _logger.warning("Skipping map file %s: %s", map_file, exc)
                    continue
                # Last loaded wins on name collisions.
                loaded[record.key] = record

        self._maps = MappingProxyType(loaded)
        _logger.info("Loaded %d maps from %s", len(loaded), map_dir)
        return len(loaded)

    def get_map(self, name: str | None) -> MapRecord | None:
        if not name:
            return None
        return self._maps.get(name.upper())

    def add_item(self, map_name: str, item: MapItem) -> bool:
        """Append *item* to a loaded map and its file."""
        record = self.get_map(map_name)
        if record is None:
            _logger.warning("No loaded map named %r; not adding %s", map_name, item)
            return False
        return append_item(record, item)

    def add_item_at_player(self, state: PlayerState, name: str) -> MapItem | None:
        """Record a named item at the player's current position.

        Returns the new item, or ``None`` when there is no position, no
        map, or the append failed.

        Raises
        ------
        ValueError
            If *name* is empty after stripping or contains a comma.
        """
        item_name = (name or "").strip()
        if not item_name:
            raise ValueError("No name provided; a map item needs a name")
        if state.loc is None or not state.map_name:
            return None
        item = MapItem(name=item_name, coord=state.loc)
        if not self.add_item(state.map_name, item):
            return None
        return item
