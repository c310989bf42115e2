"""Background watcher that keeps a merged :class:`PlayerState` current.

Every tick the watcher:

1. picks the most recently modified chat log and, if it has not been
   consumed yet, scans a private copy of it backward for area changes and
   location reports;
2. picks the most recently modified snapshot file across all install
   directories and, if new, reads its ``PlayerLoc`` record;
3. merges every candidate into the :class:`PlayerStateStore`;
4. notifies the subscriber once if the merged state differs from the last
   one reported.

Nothing that goes wrong inside a tick stops the watcher; it is logged
and the next tick tries again.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from pysotamap.config import MapperConfig
from pysotamap.ingestion.chat_log import scan_file
from pysotamap.ingestion.files import FileStamp, latest_file, latest_matching, private_copy
from pysotamap.ingestion.normalize import mtime_to_datetime
from pysotamap.ingestion.snapshot import parse_snapshot
from pysotamap.models.player import PlayerState
from pysotamap.state.store import PlayerStateStore

_logger = logging.getLogger(__name__)

PlayerStateCallback = Callable[[PlayerState], None]


class PlayerStateWatcher:
    """Poll the game's chat logs and snapshot file on a daemon thread.

    The callback runs on the watcher thread, at most once per tick and
    never concurrently with itself. Callers that touch UI state from it
    must hand off to their own thread.

    Usage::

        watcher = PlayerStateWatcher(config, on_change=print)
        watcher.start()
    """

    def __init__(
        self,
        config: MapperConfig,
        *,
        on_change: PlayerStateCallback | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._on_change = on_change
        self._logger = logger or _logger
        self._store = PlayerStateStore()
        self._last_log: FileStamp | None = None
        self._last_snapshot: FileStamp | None = None
        self._last_reported: PlayerState | None = None
        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None

    @property
    def state(self) -> PlayerState:
        """Latest merged state (not necessarily reported yet)."""
        return self._store.state

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start polling on a daemon thread. Calling it twice is a no-op.

        A thread left behind by a timed-out :meth:`stop` is still the sole
        writer until it exits, so no second thread is started in the meantime.
        """
        if self.is_running:
            if self._stop_event is not None and self._stop_event.is_set():
                self._logger.warning("Previous watcher thread is still stopping; not starting another")
            return
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=self._run, args=(stop_event,), name="pysotamap-watcher", daemon=True
        )
        self._thread.start()
        self._logger.info(
            "Watching %s/%s and %d snapshot location(s) every %.1fs",
            self._config.log_dir,
            self._config.log_file_pattern,
            len(self._config.install_dirs),
            self._config.poll_interval,
        )

    def stop(self, timeout: float | None = None) -> None:
        """Ask the loop to exit after the current tick and wait for it."""
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is None:
            return
        if thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                self._logger.warning("Watcher thread did not exit within %.2fs", timeout)
                return
        self._thread = None
        self._logger.info("Watcher stopped")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                self.poll_once()
            except Exception:
                self._logger.exception("Unexpected error in watcher tick")
            stop_event.wait(self._config.poll_interval)

    # ------------------------------------------------------------------
    # One tick
    # ------------------------------------------------------------------

    def poll_once(self) -> bool:
        """Run a single tick synchronously; return whether the subscriber was notified."""
        for name, poll in (("chat log", self._poll_chat_log), ("snapshot", self._poll_snapshot)):
            try:
                poll()
            except Exception:
                self._logger.warning("Polling %s failed; will retry next tick", name, exc_info=True)
        return self._publish()

    def _poll_chat_log(self) -> None:
        stamp = latest_matching(self._config.log_dir, self._config.log_file_pattern)
        if stamp is None or not stamp.is_newer_than(self._last_log):
            return

        with private_copy(stamp.path, self._config.temp_dir) as tmp:
            events = scan_file(tmp, self._config.timestamp_formats)
        self._last_log = stamp

        self._logger.debug("Read %d location event(s) from %s", len(events), stamp.path.name)
        self._store.apply_all(events)

    def _poll_snapshot(self) -> None:
        stamp = latest_file(self._config.snapshot_paths)
        if stamp is None or not stamp.is_newer_than(self._last_snapshot):
            return

        with private_copy(stamp.path, self._config.temp_dir) as tmp:
            text = tmp.read_text(encoding="utf-8", errors="replace")
        self._last_snapshot = stamp

        event = parse_snapshot(text, mtime_to_datetime(stamp.mtime_ns))
        if event is None:
            self._logger.debug("No PlayerLoc record in %s", stamp.path)
            return
        self._store.apply(event)

    def _publish(self) -> bool:
        state = self._store.state
        if self._last_reported is not None and state == self._last_reported:
            return False
        self._last_reported = state
        self._logger.debug("Player state changed: %s", state)

        if self._on_change is not None:
            try:
                self._on_change(state)
            except Exception:
                self._logger.warning("on_change callback failed", exc_info=True)
        return True
