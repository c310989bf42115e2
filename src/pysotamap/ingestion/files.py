"""File discovery and private copies of externally written files."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

_logger = logging.getLogger(__name__)

_TEMP_PREFIX = "_pysotamap-"
_TEMP_SUFFIX = ".tmp"


@dataclass(frozen=True)
class FileStamp:
    """A file path together with the modification time it was seen at."""

    path: Path
    mtime_ns: int

    def is_newer_than(self, other: FileStamp | None) -> bool:
        """Whether this stamp should be consumed given the last consumed one."""
        if other is None:
            return True
        return self.path != other.path or self.mtime_ns > other.mtime_ns


def _stamp(path: Path) -> FileStamp | None:
    try:
        stat = path.stat()
    except OSError:
        # Rotated or deleted between listing and stat.
        return None
    if not path.is_file():
        return None
    return FileStamp(path=path, mtime_ns=stat.st_mtime_ns)


def latest_file(paths: Iterable[Path]) -> FileStamp | None:
    """Return the most recently modified existing file.

    Ties keep the first file encountered.
    """
    latest: FileStamp | None = None
    for path in paths:
        stamp = _stamp(path)
        if stamp is None:
            continue
        if latest is None or stamp.mtime_ns > latest.mtime_ns:
            latest = stamp
    return latest


def latest_matching(directory: Path, pattern: str) -> FileStamp | None:
    """Most recently modified file in *directory* matching *pattern*.

    A missing directory yields ``None``.
    """
    if not directory.is_dir():
        return None
    return latest_file(sorted(directory.glob(pattern)))


@contextlib.contextmanager
def private_copy(source: Path, temp_dir: Path | None = None) -> Iterator[Path]:
    """Copy *source* to a private temp file and remove it on exit.

    The copy is removed even when the body raises.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=_TEMP_PREFIX, suffix=_TEMP_SUFFIX, dir=temp_dir)
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        shutil.copyfile(source, tmp_path)
        yield tmp_path
    finally:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            _logger.debug("Failed to remove temp copy %s", tmp_path, exc_info=True)


def read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8", errors="replace").splitlines()
