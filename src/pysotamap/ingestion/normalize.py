"""Normalization helpers.

Centralizes defensive parsing of numbers and timestamps read from text.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from pysotamap._constants import DEFAULT_TIMESTAMP_FORMATS
from pysotamap.models.coords import Coord3


def safe_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def parse_coord(x: Any, y: Any, z: Any) -> Coord3 | None:
    """Build a :class:`Coord3` or return ``None`` if any component is not a finite number."""
    fx, fy, fz = safe_float(x), safe_float(y), safe_float(z)
    if fx is None or fy is None or fz is None:
        return None
    return Coord3(x=fx, y=fy, z=fz)


def parse_log_timestamp(text: str, formats: Iterable[str] = DEFAULT_TIMESTAMP_FORMATS) -> datetime | None:
    """Parse a chat-log timestamp into an aware UTC datetime.

    The game writes local wall-clock time without an offset, so naive
    results are interpreted in the local timezone.
    """
    value = text.strip()
    if not value:
        return None
    for fmt in formats:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.astimezone(UTC)
    return None


def mtime_to_datetime(mtime_ns: int) -> datetime:
    return datetime.fromtimestamp(mtime_ns / 1_000_000_000, tz=UTC)
