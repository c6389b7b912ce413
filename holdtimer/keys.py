import curses
import os
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from .config import get_config_path

KEYDEBUG_MAX_LINES = 500


class Command(Enum):
    QUIT = "quit"
    MOVE_UP = "move-selection-up"
    MOVE_DOWN = "move-selection-down"
    CLEAR = "clear-selection"
    PRIMARY = "primary-key-assert"


_CHAR_COMMANDS = {
    "q": Command.QUIT,
    "Q": Command.QUIT,
    " ": Command.PRIMARY,
}

_CODE_COMMANDS = {
    curses.KEY_UP: Command.MOVE_UP,
    curses.KEY_DOWN: Command.MOVE_DOWN,
    curses.KEY_LEFT: Command.CLEAR,
}


def decode_key(key: Union[int, str, None]) -> Optional[Command]:
    """Map a ``getch``/``get_wch`` result to a command, or None to ignore it."""
    if key is None:
        return None
    if isinstance(key, str):
        if len(key) != 1:
            return None
        return _CHAR_COMMANDS.get(key)
    if key in _CODE_COMMANDS:
        return _CODE_COMMANDS[key]
    if 0 <= key <= 255:
        return _CHAR_COMMANDS.get(chr(key))
    return None


def keydebug_enabled() -> bool:
    return os.environ.get("HOLDTIMER_KEYDEBUG") == "1"


def _keyname(key: Union[int, str]) -> str:
    if isinstance(key, str):
        return key
    try:
        return curses.keyname(key).decode("ascii", "ignore")
    except (curses.error, ValueError):
        return ""


def keydebug_log(key: Union[int, str], command: Optional[Command]) -> Optional[str]:
    """Append one line per key to keydebug.log when HOLDTIMER_KEYDEBUG=1.

    The whole file is rewritten each time to keep it at KEYDEBUG_MAX_LINES;
    this runs inside the tick loop, so it is for debugging sessions only.
    """
    if not keydebug_enabled():
        return None
    name = command.name if command else "ignore"
    line = f"{datetime.now().isoformat()} raw={key!r} keyname={_keyname(key)} command={name}"
    path = get_config_path().parent / "keydebug.log"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = []
        if path.exists():
            with path.open("r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        lines.append(line)
        if len(lines) > KEYDEBUG_MAX_LINES:
            lines = lines[-KEYDEBUG_MAX_LINES:]
        with path.open("w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
    except OSError:
        pass
    return line
