"""Watcher and map-store configuration for pysotamap."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pysotamap._constants import (
    DEFAULT_LOG_FILE_PATTERN,
    DEFAULT_MAP_FILE_PATTERN,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_SNAPSHOT_FILENAME,
    DEFAULT_TIMESTAMP_FORMATS,
)
from pysotamap.exceptions import MapperConfigError


def default_log_dir() -> Path:
    """Return the directory the game writes its chat logs into."""
    app_data = os.environ.get("APPDATA")
    base = Path(app_data) if app_data else Path.home() / ".config"
    return base / "Portalarium" / "Shroud of the Avatar" / "ChatLogs"


def _split_paths(value: str) -> tuple[Path, ...]:
    return tuple(Path(part) for part in value.split(os.pathsep) if part.strip())


@dataclasses.dataclass(frozen=True)
class MapperConfig:
    """Paths, filename patterns and timing used by the map store and watcher.

    Parameters
    ----------
    map_dir : Path
        Directory holding one map-definition file per map.
    map_file_pattern : str
        Glob selecting map files inside ``map_dir``.
    log_dir : Path
        Directory the game writes its rotating chat logs into.
    log_file_pattern : str
        Glob selecting chat log files inside ``log_dir``.
    install_dirs : tuple of Path
        Game install directories searched for the snapshot file.
    snapshot_filename : str
        Name of the snapshot file inside each install directory.
    poll_interval : float
        Seconds to sleep between watcher ticks.
    temp_dir : Path or None
        Where private temp copies are written. ``None`` uses the system
        temp directory.
    timestamp_formats : tuple of str
        ``strptime`` formats tried, in order, for bracketed chat-log
        timestamps.
    """

    map_dir: Path = Path("data") / "maps"
    map_file_pattern: str = DEFAULT_MAP_FILE_PATTERN
    log_dir: Path = dataclasses.field(default_factory=default_log_dir)
    log_file_pattern: str = DEFAULT_LOG_FILE_PATTERN
    install_dirs: tuple[Path, ...] = ()
    snapshot_filename: str = DEFAULT_SNAPSHOT_FILENAME
    poll_interval: float = DEFAULT_POLL_INTERVAL
    temp_dir: Path | None = None
    timestamp_formats: tuple[str, ...] = DEFAULT_TIMESTAMP_FORMATS

    def __post_init__(self) -> None:
        # Accept plain strings for paths; frozen, so go through object.__setattr__.
        object.__setattr__(self, "map_dir", Path(self.map_dir))
        object.__setattr__(self, "log_dir", Path(self.log_dir))
        object.__setattr__(self, "install_dirs", tuple(Path(p) for p in self.install_dirs))
        if self.temp_dir is not None:
            object.__setattr__(self, "temp_dir", Path(self.temp_dir))
        if not self.poll_interval > 0:
            raise MapperConfigError(f"poll_interval must be positive, got {self.poll_interval!r}")
        if not self.timestamp_formats:
            raise MapperConfigError("timestamp_formats must not be empty")

    @property
    def snapshot_paths(self) -> tuple[Path, ...]:
        """Candidate snapshot file locations, one per install directory."""
        return tuple(install_dir / self.snapshot_filename for install_dir in self.install_dirs)

    @classmethod
    def from_env(cls, **overrides: Any) -> MapperConfig:
        """Create configuration from ``SOTAMAP_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        MapperConfigError
            If ``SOTAMAP_POLL_INTERVAL`` is not a number.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SOTAMAP_MAP_DIR": "map_dir",
            "SOTAMAP_MAP_FILE_PATTERN": "map_file_pattern",
            "SOTAMAP_LOG_DIR": "log_dir",
            "SOTAMAP_LOG_FILE_PATTERN": "log_file_pattern",
            "SOTAMAP_SNAPSHOT_FILENAME": "snapshot_filename",
            "SOTAMAP_TEMP_DIR": "temp_dir",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        install_env = env.get("SOTAMAP_INSTALL_DIRS")
        if install_env and "install_dirs" not in overrides:
            config_kwargs["install_dirs"] = _split_paths(install_env)

        interval_env = env.get("SOTAMAP_POLL_INTERVAL")
        if interval_env is not None and "poll_interval" not in overrides:
            try:
                config_kwargs["poll_interval"] = float(interval_env)
            except ValueError as exc:
                raise MapperConfigError(f"SOTAMAP_POLL_INTERVAL is not a number: {interval_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
