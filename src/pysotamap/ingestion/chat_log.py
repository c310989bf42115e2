"""Chat log parsing.

The game appends one line per chat/system message to a rotating log.
Two kinds of lines carry location data:

* area change: ``[<ts>] Entering <new area> from <old area>``
* location report (``/loc``): ``[<ts>] Area: <area> (<map>) Loc: (<x>, <y>, <z>)``

Lines are scanned from the end of the file toward the start, since the
newest events are at the bottom. Every match becomes a
:class:`~pysotamap.state.events.PlayerEvent` stamped with the line's own
timestamp. The first valid location report ends the scan because it is a
complete record; area changes found after it (i.e. before it in the file)
would be older.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from pysotamap._constants import AREA_CHANGE_RE, DEFAULT_TIMESTAMP_FORMATS, LOCATION_REPORT_RE
from pysotamap.ingestion.files import read_lines
from pysotamap.ingestion.normalize import parse_coord, parse_log_timestamp, safe_str
from pysotamap.state.events import EventSource, PlayerEvent, PlayerField

_logger = logging.getLogger(__name__)


def parse_area_change(line: str, formats: Iterable[str] = DEFAULT_TIMESTAMP_FORMATS) -> PlayerEvent | None:
    """Area change: new area name, and the map name is no longer known."""
    match = AREA_CHANGE_RE.match(line)
    if match is None:
        return None
    timestamp = parse_log_timestamp(match.group("ts"), formats)
    new_area = safe_str(match.group("new_area"))
    if timestamp is None or new_area is None:
        _logger.debug("Skipping malformed area change line: %r", line)
        return None
    return PlayerEvent(
        source=EventSource.CHAT_LOG,
        timestamp=timestamp,
        data={PlayerField.AREA_NAME: new_area, PlayerField.MAP_NAME: None},
    )


def parse_location_report(line: str, formats: Iterable[str] = DEFAULT_TIMESTAMP_FORMATS) -> PlayerEvent | None:
    match = LOCATION_REPORT_RE.match(line)
    if match is None:
        return None
    timestamp = parse_log_timestamp(match.group("ts"), formats)
    loc = parse_coord(match.group("x"), match.group("y"), match.group("z"))
    if timestamp is None or loc is None:
        _logger.debug("Skipping malformed location report line: %r", line)
        return None
    return PlayerEvent(
        source=EventSource.CHAT_LOG,
        timestamp=timestamp,
        data={
            PlayerField.AREA_NAME: safe_str(match.group("area")),
            PlayerField.MAP_NAME: safe_str(match.group("map")),
            PlayerField.LOC: loc,
        },
    )


def scan_lines(lines: Sequence[str], formats: Iterable[str] = DEFAULT_TIMESTAMP_FORMATS) -> Iterator[PlayerEvent]:
    """Yield events from the last line backward, stopping after the first location report."""
    formats = tuple(formats)
    for line in reversed(lines):
        report = parse_location_report(line, formats)
        if report is not None:
            yield report
            return
        change = parse_area_change(line, formats)
        if change is not None:
            yield change


def scan_file(path: Path, formats: Iterable[str] = DEFAULT_TIMESTAMP_FORMATS) -> list[PlayerEvent]:
    return list(scan_lines(read_lines(path), formats))
