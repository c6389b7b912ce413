"""Press-and-hold timer.

The terminal only reports key presses (repeated while a key is held), never
key releases. Holding the primary key starts a countdown; the key counts as
released once no press has been seen for more than ``RELEASE_TICKS`` ticks,
at which point the timer switches to counting up from zero.

Phases
------
PAUSED         Initial phase, counter frozen.
COUNTING_DOWN  Key held; counter decreases once per tick.
COUNTING_UP    Key released; counter increases once per tick.
"""

from dataclasses import dataclass
from enum import Enum

TICK_MS = 10
RELEASE_MS = 600
RELEASE_TICKS = RELEASE_MS // TICK_MS
COUNTDOWN_START_TICKS = 1500


class Phase(Enum):
    PAUSED = "paused"
    COUNTING_DOWN = "counting down"
    COUNTING_UP = "counting up"


@dataclass
class TimerState:
    phase: Phase = Phase.PAUSED
    elapsed_ticks: int = 0
    silence_run: int = 0

    def advance(self, key_asserted: bool) -> None:
        """Advance one tick. Called exactly once per scheduler tick."""
        if self.phase is Phase.COUNTING_DOWN:
            self.elapsed_ticks -= 1
        elif self.phase is Phase.COUNTING_UP:
            self.elapsed_ticks += 1

        if key_asserted:
            fresh_press = self.phase is Phase.PAUSED and self.silence_run == 0
            self.silence_run = 0
            if fresh_press:
                self.elapsed_ticks = COUNTDOWN_START_TICKS
                self.phase = Phase.COUNTING_DOWN
            return

        if self.phase is not Phase.COUNTING_DOWN:
            return

        self.silence_run += 1
        if self.silence_run > RELEASE_TICKS:
            self.silence_run = 0
            self.elapsed_ticks = 0
            self.phase = Phase.COUNTING_UP


def format_ticks(ticks: int) -> str:
    """Render hundredths of a second as ``S.hh`` (1500 -> "15.00")."""
    if ticks < 0:
        raise ValueError(f"negative tick count: {ticks}")
    return f"{ticks // 100}.{ticks % 100:02d}"
