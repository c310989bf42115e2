"""Custom exception hierarchy for pysotamap."""

from __future__ import annotations

from pathlib import Path


class SotaMapError(Exception):
    """Base exception for all pysotamap errors."""


class MapperConfigError(SotaMapError):
    """Invalid or missing configuration."""


class MapFileError(SotaMapError):
    """A map-definition file could not be read."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class ProjectionError(SotaMapError):
    """Map-to-canvas conversion requested before a successful ``init()``."""
