from __future__ import annotations

import os
import threading
from datetime import datetime
from pathlib import Path

import pytest

import pysotamap.watcher as watcher_module
from pysotamap.config import MapperConfig
from pysotamap.models.coords import Coord3
from pysotamap.models.player import PlayerState
from pysotamap.watcher import PlayerStateWatcher

_BASE = datetime(2026, 1, 1, 12, 0, 0)


def _ts(minute: int) -> str:
    return f"2026-01-01 12:{minute:02d}:00"


def _epoch_ns(minute: int) -> int:
    return int(_BASE.replace(minute=minute).timestamp()) * 1_000_000_000


def _loc_line(minute: int, area: str, map_name: str, loc: tuple[float, float, float]) -> str:
    return f"[{_ts(minute)}] Area: {area} ({map_name}) Loc: ({loc[0]}, {loc[1]}, {loc[2]})"


def _enter_line(minute: int, new_area: str, old_area: str = "Somewhere") -> str:
    return f"[{_ts(minute)}] Entering {new_area} from {old_area}"


def _write(path: Path, lines: list[str], mtime_ns: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


class _Recorder:
    def __init__(self) -> None:
        self.states: list[PlayerState] = []
        self.called = threading.Event()

    def __call__(self, state: PlayerState) -> None:
        self.states.append(state)
        self.called.set()


def _config(tmp_path: Path, **overrides: object) -> MapperConfig:
    (tmp_path / "tmp").mkdir(exist_ok=True)
    kwargs: dict[str, object] = {
        "map_dir": tmp_path / "maps",
        "log_dir": tmp_path / "logs",
        "install_dirs": (tmp_path / "install_a", tmp_path / "install_b"),
        "temp_dir": tmp_path / "tmp",
        "poll_interval": 0.01,
    }
    kwargs.update(overrides)
    return MapperConfig(**kwargs)  # type: ignore[arg-type]


def test_missing_log_dir_does_not_raise_or_change_state(tmp_path: Path) -> None:
    recorder = _Recorder()
    watcher = PlayerStateWatcher(_config(tmp_path), on_change=recorder)

    watcher.poll_once()
    watcher.poll_once()

    assert watcher.state == PlayerState()
    # The first tick always reports, even when nothing is known yet.
    assert recorder.states == [PlayerState()]


def test_location_report_is_picked_up(tmp_path: Path) -> None:
    config = _config(tmp_path)
    _write(
        config.log_dir / "SotAChatLog_Avatar_2026-01-01.txt",
        ["[2026-01-01 11:59:00] Bob: hi", _loc_line(1, "Soltown", "Novia_R1_City_Soltown", (-15.7, 28.0, 23.2))],
        _epoch_ns(2),
    )
    recorder = _Recorder()
    watcher = PlayerStateWatcher(config, on_change=recorder)

    assert watcher.poll_once()

    assert recorder.states == [
        PlayerState(area_name="Soltown", map_name="Novia_R1_City_Soltown", loc=Coord3.of(-15.7, 28.0, 23.2)),
    ]


def test_identical_ticks_notify_once(tmp_path: Path) -> None:
    config = _config(tmp_path)
    log = _write(config.log_dir / "SotAChatLog_a.txt", [_loc_line(1, "A", "Map_A", (1, 2, 3))], _epoch_ns(1))
    recorder = _Recorder()
    watcher = PlayerStateWatcher(config, on_change=recorder)

    watcher.poll_once()
    # Same content rewritten later: re-read, same merged state.
    _write(log, [_loc_line(1, "A", "Map_A", (1, 2, 3))], _epoch_ns(5))
    watcher.poll_once()
    watcher.poll_once()

    assert len(recorder.states) == 1


def test_most_recently_modified_log_wins(tmp_path: Path) -> None:
    config = _config(tmp_path)
    _write(config.log_dir / "SotAChatLog_new.txt", [_loc_line(3, "New", "Map_New", (3, 3, 3))], _epoch_ns(4))
    _write(config.log_dir / "SotAChatLog_old.txt", [_loc_line(1, "Old", "Map_Old", (1, 1, 1))], _epoch_ns(2))
    _write(config.log_dir / "unrelated.txt", [_loc_line(9, "X", "Map_X", (9, 9, 9))], _epoch_ns(9))
    watcher = PlayerStateWatcher(config)

    watcher.poll_once()

    assert watcher.state.map_name == "Map_New"


@pytest.mark.parametrize("report_first", [True, False])
def test_newer_map_name_wins_regardless_of_discovery_order(tmp_path: Path, report_first: bool) -> None:
    config = _config(tmp_path)
    report = [_loc_line(10, "Soltown", "A", (1, 2, 3))]
    # Area change stamped *earlier* than the report (e.g. clock adjusted).
    area_change = [_enter_line(5, "Novia")]
    first, second = (report, area_change) if report_first else (area_change, report)
    watcher = PlayerStateWatcher(config)

    _write(config.log_dir / "SotAChatLog_1.txt", first, _epoch_ns(20))
    watcher.poll_once()
    _write(config.log_dir / "SotAChatLog_2.txt", second, _epoch_ns(21))
    watcher.poll_once()

    assert watcher.state.map_name == "A"
    assert watcher.state.area_name == "Soltown"


def test_area_change_after_report_clears_map(tmp_path: Path) -> None:
    config = _config(tmp_path)
    _write(
        config.log_dir / "SotAChatLog_1.txt",
        [_loc_line(1, "Soltown", "A", (1, 2, 3)), _enter_line(2, "Novia", "Soltown")],
        _epoch_ns(3),
    )
    watcher = PlayerStateWatcher(config)

    watcher.poll_once()

    assert watcher.state == PlayerState(area_name="Novia", map_name=None, loc=Coord3.of(1, 2, 3))


def test_regressed_timestamps_are_resolved_by_timestamp_not_write_order(tmp_path: Path) -> None:
    # Known, accepted behaviour: when the clock goes backwards inside one
    # file, the line with the newest timestamp wins even though the other
    # line was written later.
    config = _config(tmp_path)
    _write(
        config.log_dir / "SotAChatLog_1.txt",
        [_loc_line(30, "Soltown", "A", (1, 2, 3)), _enter_line(10, "Novia", "Soltown")],
        _epoch_ns(31),
    )
    watcher = PlayerStateWatcher(config)

    watcher.poll_once()

    assert watcher.state == PlayerState(area_name="Soltown", map_name="A", loc=Coord3.of(1, 2, 3))


def test_snapshot_updates_location_when_newer(tmp_path: Path) -> None:
    config = _config(tmp_path)
    _write(config.log_dir / "SotAChatLog_1.txt", [_loc_line(1, "Soltown", "A", (1, 2, 3))], _epoch_ns(1))
    _write(tmp_path / "install_a" / "CurrentPlayerData.txt", ["PlayerLoc: 4, 5, 6"], _epoch_ns(2))
    _write(tmp_path / "install_b" / "CurrentPlayerData.txt", ["PlayerLoc: 7, 8, 9"], _epoch_ns(3))
    recorder = _Recorder()
    watcher = PlayerStateWatcher(config, on_change=recorder)

    watcher.poll_once()

    assert recorder.states == [PlayerState(area_name="Soltown", map_name="A", loc=Coord3.of(7, 8, 9))]


def test_older_snapshot_does_not_override_log(tmp_path: Path) -> None:
    config = _config(tmp_path)
    _write(config.log_dir / "SotAChatLog_1.txt", [_loc_line(10, "Soltown", "A", (1, 2, 3))], _epoch_ns(10))
    _write(tmp_path / "install_a" / "CurrentPlayerData.txt", ["PlayerLoc: 4, 5, 6"], _epoch_ns(5))
    watcher = PlayerStateWatcher(config)

    watcher.poll_once()

    assert watcher.state.loc == Coord3.of(1, 2, 3)


def test_temp_copies_are_removed(tmp_path: Path) -> None:
    config = _config(tmp_path)
    _write(config.log_dir / "SotAChatLog_1.txt", [_loc_line(1, "Soltown", "A", (1, 2, 3))], _epoch_ns(1))
    _write(tmp_path / "install_a" / "CurrentPlayerData.txt", ["PlayerLoc: 4, 5, 6"], _epoch_ns(2))
    watcher = PlayerStateWatcher(config)

    watcher.poll_once()

    assert list((tmp_path / "tmp").iterdir()) == []


def test_parse_failure_is_contained_and_retried(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = _config(tmp_path)
    _write(config.log_dir / "SotAChatLog_1.txt", [_loc_line(1, "Soltown", "A", (1, 2, 3))], _epoch_ns(1))
    watcher = PlayerStateWatcher(config)

    def _boom(*_args: object) -> list[object]:
        raise OSError("file locked")

    with monkeypatch.context() as patch:
        patch.setattr(watcher_module, "scan_file", _boom)
        watcher.poll_once()

    assert watcher.state == PlayerState()
    assert list((tmp_path / "tmp").iterdir()) == []

    watcher.poll_once()

    assert watcher.state.map_name == "A"


def test_failing_callback_does_not_break_tick(tmp_path: Path) -> None:
    def _raise(_state: PlayerState) -> None:
        raise RuntimeError("renderer gone")

    watcher = PlayerStateWatcher(_config(tmp_path), on_change=_raise)

    assert watcher.poll_once()
    assert not watcher.poll_once()


def test_background_thread_reports_changes(tmp_path: Path) -> None:
    config = _config(tmp_path)
    recorder = _Recorder()
    watcher = PlayerStateWatcher(config, on_change=recorder)

    watcher.start()
    try:
        assert watcher.is_running
        assert recorder.called.wait(2.0)
        recorder.called.clear()

        _write(config.log_dir / "SotAChatLog_1.txt", [_loc_line(1, "Soltown", "A", (1, 2, 3))], _epoch_ns(1))

        assert recorder.called.wait(2.0)
    finally:
        watcher.stop(timeout=2.0)

    assert not watcher.is_running
    assert recorder.states[-1].map_name == "A"


def _watcher_threads() -> list[threading.Thread]:
    return [t for t in threading.enumerate() if t.name == "pysotamap-watcher" and t.is_alive()]


def test_restart_after_timed_out_stop_keeps_a_single_thread(tmp_path: Path) -> None:
    entered = threading.Event()
    release = threading.Event()

    def slow_callback(state: PlayerState) -> None:
        entered.set()
        release.wait(5.0)

    watcher = PlayerStateWatcher(_config(tmp_path), on_change=slow_callback)
    watcher.start()
    try:
        assert entered.wait(2.0)

        watcher.stop(timeout=0.05)
        assert watcher.is_running

        watcher.start()
        assert len(_watcher_threads()) == 1
    finally:
        release.set()
        watcher.stop(timeout=2.0)

    assert not watcher.is_running
    assert _watcher_threads() == []


def test_restart_after_clean_stop_polls_again(tmp_path: Path) -> None:
    config = _config(tmp_path)
    recorder = _Recorder()
    watcher = PlayerStateWatcher(config, on_change=recorder)

    watcher.start()
    try:
        assert recorder.called.wait(2.0)
    finally:
        watcher.stop(timeout=2.0)
    assert not watcher.is_running

    recorder.called.clear()
    watcher.start()
    try:
        _write(config.log_dir / "SotAChatLog_1.txt", [_loc_line(1, "Soltown", "B", (1, 2, 3))], _epoch_ns(1))
        assert recorder.called.wait(2.0)
    finally:
        watcher.stop(timeout=2.0)

    assert recorder.states[-1].map_name == "B"
