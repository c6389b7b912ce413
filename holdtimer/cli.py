import argparse
import sys
from typing import Dict

from . import __version__
from .config import get_items, get_legend, load_config
from .scheduler import AppState, Snapshot


def _format_snapshot(snapshot: Snapshot) -> str:
    lines = [f"timer: {snapshot.time_text} ({snapshot.phase.value})", "items:"]
    for idx, item in enumerate(snapshot.items):
        marker = ">>" if idx == snapshot.selected else "  "
        lines.append(f"{marker} {item.label}")
    lines.append("keybinds:")
    for entry in snapshot.legend:
        lines.append(f"   {entry.category:<9} {entry.label}")
    return "\n".join(lines)


def _headless_snapshot(config: Dict) -> str:
    state = AppState(get_items(config), get_legend(config))
    return _format_snapshot(state.snapshot())


def parse_args(argv=None):
    epilog = (
        "Controls (interactive): q quit, hold space to count down, release to count up, "
        "up/down move the selection, left clears it."
    )
    parser = argparse.ArgumentParser(
        prog="holdtimer",
        description="Full-screen terminal press-and-hold timer dashboard",
        epilog=epilog,
    )
    parser.add_argument("--headless", action="store_true", help="print a text snapshot of the dashboard and exit")
    parser.add_argument("--version", action="version", version=f"holdtimer {__version__}")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config()
    if args.headless:
        print(_headless_snapshot(config))
        return 0

    from .ui import TerminalError, run

    try:
        run(config)
    except TerminalError as exc:
        print(f"holdtimer: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
