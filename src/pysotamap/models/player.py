"""Player location model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pysotamap.models.coords import Coord3


class PlayerState(BaseModel):
    """Best current knowledge of where the player is.

    Every field is optional; absence is a normal state meaning "not known
    yet" (or, for ``map_name``, "unknown since the last area change").

    Parameters
    ----------
    area_name : str or None
        Human readable area name, e.g. ``"Soltown"``.
    map_name : str or None
        Map identifier as reported by the game, e.g.
        ``"Novia_R1_City_Soltown"``. Matches a map file stem.
    loc : Coord3 or None
        Player position in game space.
    """

    model_config = ConfigDict(frozen=True)

    area_name: str | None = None
    map_name: str | None = None
    loc: Coord3 | None = None

    @property
    def is_empty(self) -> bool:
        return self.area_name is None and self.map_name is None and self.loc is None

    def __str__(self) -> str:
        return (
            f"Area={self.area_name or 'null'}, Map={self.map_name or 'null'}, "
            f"Loc={self.loc if self.loc is not None else 'null'}"
        )
