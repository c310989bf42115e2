"""Why a map cannot be drawn yet.

Renderers show a "no data" screen whenever the player state or the
matching map is incomplete. These helpers compute the reasons in the
order they should be shown.
"""

from __future__ import annotations

from pysotamap.geometry.projector import MapProjector
from pysotamap.models.map_record import MapRecord
from pysotamap.models.player import PlayerState

NO_PLAYER_DATA = "no player data, try using /loc"
NO_PLAYER_MAP = "unable to determine player map, try using /loc"
NO_PLAYER_LOC = "unable to determine player position, try using /loc"
NO_MAP_FILE = "no map file for current map, compare /loc output to the map directory"
EMPTY_MAP_FILE = "empty map file, please add some entries"


def describe_missing_data(player: PlayerState | None, map_record: MapRecord | None) -> list[str]:
    """Return the reasons the map cannot be drawn; empty when it can."""
    reasons: list[str] = []

    if player is None or player.is_empty:
        reasons.append(NO_PLAYER_DATA)
    else:
        if not player.map_name:
            reasons.append(NO_PLAYER_MAP)
        if player.loc is None:
            reasons.append(NO_PLAYER_LOC)

    if map_record is None:
        if player is not None and player.map_name:
            reasons.append(NO_MAP_FILE)
    elif not map_record.has_extents:
        reasons.append(EMPTY_MAP_FILE)

    return reasons


def can_render(
    player: PlayerState | None,
    map_record: MapRecord | None,
    width: float,
    height: float,
) -> bool:
    if player is None or map_record is None or describe_missing_data(player, map_record):
        return False
    return MapProjector(map_record, width, height, [player.loc]).init()
