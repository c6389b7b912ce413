"""Shared test helpers for holdtimer."""

from typing import List, Optional, Tuple, Union

from holdtimer.timer import TimerState

Key = Union[int, str]


class ScriptedTerminal:
    """Fake clock plus input source.

    ``events`` are ``(time, key)`` pairs. ``read_key`` waits by moving the
    clock forward, returning the next event if it lands inside the window.
    """

    def __init__(self, events=()):
        self.now = 0.0
        self.events: List[Tuple[float, Key]] = sorted(events, key=lambda e: e[0])
        self.waits: List[float] = []

    def clock(self) -> float:
        return self.now

    def read_key(self, timeout: float) -> Optional[Key]:
        self.waits.append(timeout)
        deadline = self.now + timeout
        if self.events and self.events[0][0] <= deadline:
            at, key = self.events.pop(0)
            self.now = max(self.now, at)
            return key
        self.now = deadline
        return None


class FakeWindow:
    """Records ``addstr`` calls instead of drawing."""

    def __init__(self, rows: int = 30, cols: int = 120):
        self.rows = rows
        self.cols = cols
        self.writes: List[Tuple[int, int, str]] = []
        self.refreshed = 0
        self.keypad_calls: List[bool] = []

    def getmaxyx(self):
        return self.rows, self.cols

    def erase(self):
        self.writes.clear()

    def refresh(self):
        self.refreshed += 1

    def addstr(self, y, x, text, attr=0):
        self.writes.append((y, x, text))

    def keypad(self, flag):
        self.keypad_calls.append(flag)

    def text(self) -> str:
        return "\n".join(text for _, _, text in self.writes)


def run_ticks(timer: TimerState, count: int, key_asserted: bool = False) -> None:
    for _ in range(count):
        timer.advance(key_asserted)
