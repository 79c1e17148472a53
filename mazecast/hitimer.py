"""A microsecond interval timer driven by a programmable interval timer.

The timer counts interrupt ticks and the down-counter value between
ticks, as an 8254 channel does. It reads them from a clock object, so
the elapsed-time arithmetic can run against real time or a scripted
source.
"""

from __future__ import annotations

import time
from typing import Protocol

PIT_FREQUENCY = 1_193_180
DEFAULT_PULSES_PER_TICK = 65535
MAX_TICKS = 0xFFFFFFFF
PRECISE_LIMIT = 4_200_000
LATENCY_THRESHOLD = 65533

_WORD = 0xFFFF
_DWORD = 0xFFFFFFFF


class TimerClock(Protocol):
    """A source of interrupt ticks and a latched down-counter."""

    ticks: int
    count: int

    def latch(self) -> int:
        """Return the current down-counter value."""

    def set_count(self, count: int) -> None:
        """Reprogram the counter reload value (0 means the full range)."""


class _SystemClock:
    """Models an interval timer running from the monotonic system clock."""

    def __init__(self) -> None:
        self.count = 0
        self._origin = time.perf_counter_ns()

    def _pulses(self) -> int:
        return (time.perf_counter_ns() - self._origin) * PIT_FREQUENCY // 1_000_000_000

    def _period(self) -> int:
        return self.count or 0x10000

    @property
    def ticks(self) -> int:
        return (self._pulses() // self._period()) & _DWORD

    def latch(self) -> int:
        period = self._period()
        return (period - self._pulses() % period) & _WORD

    def set_count(self, count: int) -> None:
        self.count = count


def elapsed_pulses(
    start_tick: int,
    end_tick: int,
    start_count: int,
    finish_count: int,
    count_val: int,
) -> int:
    """Return the counter pulses between two (tick, counter) readings.

    A reload value of 0 counts as 65535 pulses per tick; the tick counter
    wraps at the largest 32-bit value.
    """
    pulses_per_tick = DEFAULT_PULSES_PER_TICK if count_val == 0 else count_val

    if end_tick >= start_tick:
        num_ticks = end_tick - start_tick
    else:
        num_ticks = (MAX_TICKS - start_tick) + end_tick

    if num_ticks == 0:
        elapsed = (start_count - finish_count) & _WORD
    elif num_ticks == 1:
        elapsed = start_count + ((pulses_per_tick - finish_count) & _WORD)
    else:
        elapsed = (
            (num_ticks - 1) * pulses_per_tick
            + start_count
            + ((pulses_per_tick - finish_count) & _WORD)
        )
    return elapsed & _DWORD


def pulses_to_microseconds(pulses: int) -> int:
    """Convert counter pulses to microseconds.

    Short runs keep the fractional part by multiplying first; longer runs
    divide first so the value stays within 32 bits.
    """
    if pulses <= PRECISE_LIMIT:
        return pulses * 1000 // 1193
    return (pulses // 1193 * 1000) & _DWORD


class HTimer:
    """A stopwatch reporting elapsed time in microseconds."""

    def __init__(self, clock: TimerClock | None = None) -> None:
        self._clock = clock if clock is not None else _SystemClock()
        self.running = False
        self._start_tick = 0
        self._start_count = 0

    def timer_on(self) -> None:
        """Start timing from the current counter reading."""
        self.running = True
        self._start_tick = self._clock.ticks
        self._start_count = self._clock.latch()
        # A count latched just after reload may belong to a tick not yet seen.
        if self._start_count >= LATENCY_THRESHOLD:
            ticks = self._clock.ticks
            if ticks != self._start_tick:
                self._start_tick = ticks

    def _calc_elapsed(self) -> int:
        if not self.running:
            return 0
        end_tick = self._clock.ticks
        finish_count = self._clock.latch()
        pulses = elapsed_pulses(
            self._start_tick, end_tick, self._start_count, finish_count, self._clock.count
        )
        return pulses_to_microseconds(pulses)

    def timer_off(self) -> int:
        """Stop timing and return the elapsed microseconds."""
        elapsed = self._calc_elapsed()
        self._start_tick = 0
        self._start_count = 0
        self.running = False
        return elapsed

    def get_elapsed(self) -> int:
        """Return the elapsed microseconds without stopping the timer."""
        return self._calc_elapsed()

    def set_count(self, count: int) -> None:
        """Reprogram the counter reload value shared by all timers on the clock."""
        if not 0 <= count <= _WORD:
            raise ValueError(f"counter value must be 0..65535, got {count}")
        self._clock.set_count(count)