from __future__ import annotations

from datetime import UTC, datetime

from pysotamap.ingestion.snapshot import parse_snapshot
from pysotamap.models.coords import Coord3
from pysotamap.state.events import EventSource, PlayerField

_MODIFIED = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def test_player_loc_record_is_extracted() -> None:
    text = "PlayerName: Avatar\nPlayerLoc: -15.5, 28, 23.25\nScene: Soltown\n"

    event = parse_snapshot(text, _MODIFIED)

    assert event is not None
    assert event.source == EventSource.SNAPSHOT
    assert event.timestamp == _MODIFIED
    assert event.data == {PlayerField.LOC: Coord3.of(-15.5, 28, 23.25)}


def test_missing_or_bad_player_loc_yields_nothing() -> None:
    assert parse_snapshot("Scene: Soltown\n", _MODIFIED) is None
    assert parse_snapshot("PlayerLoc: 1, north, 3\n", _MODIFIED) is None
    assert parse_snapshot("", _MODIFIED) is None
