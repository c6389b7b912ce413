import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

from .config import LegendEntry, ListItem
from .keys import Command, decode_key, keydebug_log
from .selection import SelectableList
from .timer import TICK_MS, Phase, TimerState, format_ticks

TICK_SECONDS = TICK_MS / 1000.0

# Waits at most ``timeout`` seconds for one key; None when nothing arrived.
KeyReader = Callable[[float], Union[int, str, None]]


@dataclass(frozen=True)
class Snapshot:
    items: Tuple[ListItem, ...]
    selected: Optional[int]
    time_text: str
    phase: Phase
    legend: Tuple[LegendEntry, ...]


class AppState:
    def __init__(self, items: Sequence[ListItem], legend: Sequence[LegendEntry]) -> None:
        self.items: SelectableList[ListItem] = SelectableList(items)
        self.timer = TimerState()
        self.legend = list(legend)
        self.key_asserted = False
        self.running = True
        self.last_tick = 0.0

    def dispatch(self, command: Optional[Command]) -> bool:
        """Apply one command. Returns True when the screen needs a redraw."""
        if command is None:
            return False
        if command is Command.QUIT:
            self.running = False
        elif command is Command.MOVE_DOWN:
            self.items.next()
        elif command is Command.MOVE_UP:
            self.items.previous()
        elif command is Command.CLEAR:
            self.items.clear_selection()
        elif command is Command.PRIMARY:
            self.key_asserted = True
            return False
        return True

    def snapshot(self) -> Snapshot:
        return Snapshot(
            items=tuple(self.items.items),
            selected=self.items.selected,
            # A countdown held past zero goes negative; show it as 0.00.
            time_text=format_ticks(max(0, self.timer.elapsed_ticks)),
            phase=self.timer.phase,
            legend=tuple(self.legend),
        )


def step(
    state: AppState,
    read_key: KeyReader,
    clock: Callable[[], float] = time.monotonic,
    tick_interval: float = TICK_SECONDS,
) -> bool:
    """Run one loop iteration: wait for input, then advance the timer on a tick boundary.

    Returns True when something changed that should be redrawn.
    """
    timeout = max(0.0, tick_interval - (clock() - state.last_tick))
    key = read_key(timeout)
    dirty = False
    if key is not None:
        command = decode_key(key)
        keydebug_log(key, command)
        dirty = state.dispatch(command)
        if not state.running:
            return False

    if clock() - state.last_tick >= tick_interval:
        state.timer.advance(state.key_asserted)
        state.key_asserted = False
        state.last_tick = clock()
        dirty = True
    return dirty


def run_loop(
    state: AppState,
    read_key: KeyReader,
    render: Callable[[Snapshot], None],
    clock: Callable[[], float] = time.monotonic,
    tick_interval: float = TICK_SECONDS,
) -> None:
    state.last_tick = clock()
    render(state.snapshot())
    while state.running:
        if step(state, read_key, clock, tick_interval):
            render(state.snapshot())
