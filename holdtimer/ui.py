import curses
import math
import sys
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple

from .config import get_items, get_legend
from .scheduler import AppState, KeyReader, Snapshot, run_loop

LIST_WIDTH_PCT = 30
TIMER_WIDTH_PCT = 50
TIMER_MARGIN_Y = 10
TIMER_MARGIN_X = 30
HIGHLIGHT_SYMBOL = ">> "
ITALIC = getattr(curses, "A_ITALIC", curses.A_NORMAL)
FILLER = "Lorem ipsum dolor sit amet, consectetur adipiscing elit."

PAIR_CRITICAL = 1
PAIR_ERROR = 2
PAIR_WARNING = 3
PAIR_INFO = 4
PAIR_HIGHLIGHT = 5
PAIR_ITEM = 6

_CATEGORY_PAIRS = {
    "CRITICAL": PAIR_CRITICAL,
    "ERROR": PAIR_ERROR,
    "WARNING": PAIR_WARNING,
    "INFO": PAIR_INFO,
}


class TerminalError(RuntimeError):
    """The terminal could not be switched into dashboard mode."""


def _restore(stdscr) -> None:
    # Every step runs even if an earlier one fails: partial setups land here too.
    if stdscr is not None:
        for undo in (curses.nocbreak, lambda: stdscr.keypad(False), curses.echo, lambda: curses.curs_set(1)):
            try:
                undo()
            except curses.error:
                pass
        try:
            curses.endwin()
        except curses.error:
            pass
    sys.stdout.write("\x1b[?1049l")
    sys.stdout.flush()


@contextmanager
def terminal() -> Iterator:
    stdscr = None
    try:
        stdscr = curses.initscr()
        sys.stdout.write("\x1b[?1049h")
        sys.stdout.flush()
        curses.noecho()
        curses.cbreak()
        stdscr.keypad(True)
    except curses.error as exc:
        _restore(stdscr)
        raise TerminalError(f"could not set up terminal: {exc}") from exc
    try:
        curses.curs_set(0)
    except curses.error:
        pass

    try:
        yield stdscr
    finally:
        _restore(stdscr)


def _init_colors() -> Dict[str, int]:
    attrs = {"highlight": curses.A_REVERSE | curses.A_BOLD, "item": curses.A_NORMAL}
    if not curses.has_colors():
        return attrs
    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        background = curses.COLOR_BLACK
    curses.init_pair(PAIR_CRITICAL, curses.COLOR_RED, background)
    curses.init_pair(PAIR_ERROR, curses.COLOR_MAGENTA, background)
    curses.init_pair(PAIR_WARNING, curses.COLOR_YELLOW, background)
    curses.init_pair(PAIR_INFO, curses.COLOR_BLUE, background)
    curses.init_pair(PAIR_HIGHLIGHT, curses.COLOR_BLACK, curses.COLOR_GREEN)
    curses.init_pair(PAIR_ITEM, curses.COLOR_BLACK, curses.COLOR_WHITE)
    attrs["highlight"] = curses.color_pair(PAIR_HIGHLIGHT) | curses.A_BOLD
    attrs["item"] = curses.color_pair(PAIR_ITEM)
    for category, pair in _CATEGORY_PAIRS.items():
        attrs[category] = curses.color_pair(pair)
    return attrs


def _addstr(stdscr, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(y, x, text, attr)
    except curses.error:
        pass


def _draw_box(stdscr, y: int, x: int, height: int, width: int, title: str = "") -> None:
    if height < 2 or width < 2:
        return
    horiz = "-" * (width - 2)
    _addstr(stdscr, y, x, f"+{horiz}+")
    _addstr(stdscr, y + height - 1, x, f"+{horiz}+")
    for row in range(y + 1, y + height - 1):
        _addstr(stdscr, row, x, "|")
        _addstr(stdscr, row, x + width - 1, "|")
    if title:
        _addstr(stdscr, y, x + 1, title[: width - 2])


def _panel_widths(cols: int) -> Tuple[int, int, int]:
    left = cols * LIST_WIDTH_PCT // 100
    middle = cols * TIMER_WIDTH_PCT // 100
    return left, middle, cols - left - middle


def list_lines(snapshot: Snapshot) -> List[Tuple[str, bool]]:
    """Flatten the items into (text, selected) rows, label first then filler."""
    lines = []
    indent = " " * len(HIGHLIGHT_SYMBOL)
    for idx, item in enumerate(snapshot.items):
        selected = idx == snapshot.selected
        prefix = HIGHLIGHT_SYMBOL if selected else indent
        lines.append((f"{prefix}{item.label}", selected))
        for _ in range(item.lines):
            lines.append((f"{indent}{FILLER}", selected))
    return lines


def _scroll_offset(lines: List[Tuple[str, bool]], height: int) -> int:
    selected_rows = [i for i, (_, selected) in enumerate(lines) if selected]
    if not selected_rows or selected_rows[-1] < height:
        return 0
    return min(selected_rows[0], selected_rows[-1] - height + 1)


def _draw_list(stdscr, snapshot: Snapshot, x: int, width: int, rows: int, attrs: Dict[str, int]) -> None:
    top_height = rows // 2
    _draw_box(stdscr, 0, x, top_height, width, "Selection")
    if snapshot.selected is not None:
        label = snapshot.items[snapshot.selected].label
        _addstr(stdscr, 1, x + 1, label[: max(0, width - 2)])

    box_y = top_height
    box_h = rows - top_height
    _draw_box(stdscr, box_y, x, box_h, width, "List")
    inner_h = box_h - 2
    inner_w = width - 2
    if inner_h <= 0 or inner_w <= 0:
        return
    lines = list_lines(snapshot)
    offset = _scroll_offset(lines, inner_h)
    for row, (text, selected) in enumerate(lines[offset:offset + inner_h]):
        attr = attrs["highlight"] if selected else attrs["item"]
        _addstr(stdscr, box_y + 1 + row, x + 1, text[:inner_w].ljust(inner_w), attr)


def _draw_timer(stdscr, snapshot: Snapshot, x: int, width: int, rows: int) -> None:
    margin_y = min(TIMER_MARGIN_Y, max(0, (rows - 4) // 2))
    margin_x = min(TIMER_MARGIN_X, max(0, (width - 12) // 2))
    box_y = margin_y
    box_x = x + margin_x
    box_h = rows - 2 * margin_y
    box_w = width - 2 * margin_x
    _draw_box(stdscr, box_y, box_x, box_h, box_w)
    inner_w = box_w - 2
    if inner_w <= 0 or box_h < 3:
        return
    lines = [(snapshot.time_text, curses.A_BOLD), (snapshot.phase.value, curses.A_DIM)]
    start = box_y + max(1, (box_h - len(lines)) // 2)
    for i, (text, attr) in enumerate(lines):
        row = start + i
        if row >= box_y + box_h - 1:
            break
        text = text[:inner_w]
        _addstr(stdscr, row, box_x + 1 + (inner_w - len(text)) // 2, text, attr)


def _draw_legend(stdscr, snapshot: Snapshot, x: int, width: int, rows: int, attrs: Dict[str, int]) -> None:
    _draw_box(stdscr, 0, x, rows, width, "Keybinds")
    inner_h = rows - 2
    inner_w = width - 2
    if inner_h <= 0 or inner_w <= 0:
        return
    # Anchored to the bottom edge; entries that don't fit drop off the top.
    entries = list(snapshot.legend)[-inner_h:]
    row = rows - 1 - len(entries)
    for entry in entries:
        category = f"{entry.category:<9}"
        _addstr(stdscr, row, x + 1, category[:inner_w], attrs.get(entry.category, 0))
        rest = inner_w - len(category) - 1
        if rest > 0:
            _addstr(stdscr, row, x + 1 + len(category) + 1, entry.label[:rest], ITALIC)
        row += 1


def draw(stdscr, snapshot: Snapshot, attrs: Dict[str, int]) -> None:
    rows, cols = stdscr.getmaxyx()
    left, middle, right = _panel_widths(cols)
    stdscr.erase()
    _draw_list(stdscr, snapshot, 0, left, rows, attrs)
    _draw_timer(stdscr, snapshot, left, middle, rows)
    _draw_legend(stdscr, snapshot, left + middle, right, rows, attrs)
    stdscr.refresh()


def key_reader(stdscr) -> KeyReader:
    def read_key(timeout: float):
        stdscr.timeout(math.ceil(timeout * 1000))
        key = stdscr.getch()
        return None if key == -1 else key

    return read_key


def run(config: Dict) -> None:
    state = AppState(get_items(config), get_legend(config))
    with terminal() as stdscr:
        try:
            attrs = _init_colors()
        except curses.error as exc:
            raise TerminalError(f"could not set up colours: {exc}") from exc
        run_loop(state, key_reader(stdscr), lambda snapshot: draw(stdscr, snapshot, attrs))
