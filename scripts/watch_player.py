#!/usr/bin/env python3
"""Follow the player's location from the command line.

Runs the watcher against the game's chat logs (and snapshot files, when
install directories are given) and prints one line per change. When a
map file matches the reported map, the projected position on a virtual
canvas is printed too, which is handy when checking a map's
``MapCoordSys`` setting.

Usage
-----
::

    python scripts/watch_player.py --log-dir "$APPDATA/Portalarium/Shroud of the Avatar/ChatLogs" \
        --install-dir "C:/Program Files/Shroud of the Avatar" --map-dir data/maps
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysotamap import (  # noqa: E402
    MapperConfig,
    MapProjector,
    MapStore,
    PlayerState,
    PlayerStateWatcher,
    describe_missing_data,
)

_LOG = logging.getLogger("watch_player")


def _describe(state: PlayerState, store: MapStore, width: float, height: float) -> str:
    record = store.get_map(state.map_name)
    reasons = describe_missing_data(state, record)
    if reasons:
        return f"{state}  [{'; '.join(reasons)}]"
    projector = MapProjector(record, width, height, [state.loc])
    if not projector.init() or state.loc is None:
        return f"{state}  [cannot project]"
    canvas_x, canvas_y = projector.convert_map_to_canvas(state.loc)
    return f"{state}  -> canvas ({canvas_x:.1f}, {canvas_y:.1f}) of {width:g}x{height:g}"


def main() -> int:
    parser = argparse.ArgumentParser(description="Print player location changes read from the game logs")
    parser.add_argument("--log-dir", type=Path, help="Chat log directory")
    parser.add_argument("--install-dir", type=Path, action="append", default=[], help="Game install directory")
    parser.add_argument("--map-dir", type=Path, help="Map directory")
    parser.add_argument("--interval", type=float, help="Poll interval in seconds")
    parser.add_argument("--canvas", default="800x600", help="Virtual canvas size WIDTHxHEIGHT (default: 800x600)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y.%m.%d@%H:%M:%S",
    )

    try:
        width_text, height_text = args.canvas.lower().split("x", 1)
        width, height = float(width_text), float(height_text)
    except ValueError:
        parser.error(f"invalid --canvas value: {args.canvas!r}")

    overrides: dict[str, Any] = {}
    if args.log_dir is not None:
        overrides["log_dir"] = args.log_dir
    if args.install_dir:
        overrides["install_dirs"] = tuple(args.install_dir)
    if args.map_dir is not None:
        overrides["map_dir"] = args.map_dir
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    config = MapperConfig.from_env(**overrides)

    store = MapStore(config)
    store.load()

    def on_change(state: PlayerState) -> None:
        print(_describe(state, store, width, height), flush=True)

    watcher = PlayerStateWatcher(config, on_change=on_change, logger=_LOG)
    done = threading.Event()
    signal.signal(signal.SIGINT, lambda *_: done.set())

    watcher.start()
    done.wait()
    watcher.stop(timeout=config.poll_interval * 2)
    return 0


if __name__ == "__main__":
    sys.exit(main())
