"""Snapshot file parsing.

The game keeps a small "current player data" file in its install
directory and overwrites it in place. Only the ``PlayerLoc:`` record is
used. The file has no per-field timestamps, so the resulting event is
stamped with the file's modification time.
"""

from __future__ import annotations

import logging
from datetime import datetime

from pysotamap._constants import SNAPSHOT_LOC_RE
from pysotamap.ingestion.normalize import parse_coord
from pysotamap.state.events import EventSource, PlayerEvent, PlayerField

_logger = logging.getLogger(__name__)


def parse_snapshot(text: str, modified_at: datetime) -> PlayerEvent | None:
    match = SNAPSHOT_LOC_RE.search(text)
    if match is None:
        return None
    loc = parse_coord(match.group("x"), match.group("y"), match.group("z"))
    if loc is None:
        _logger.debug("Skipping snapshot with non-numeric PlayerLoc: %r", match.group(0))
        return None
    return PlayerEvent(
        source=EventSource.SNAPSHOT,
        timestamp=modified_at,
        data={PlayerField.LOC: loc},
    )
