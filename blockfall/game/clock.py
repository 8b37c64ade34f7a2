"""
Game clock: the descent and render timers that drive a running game.

Time is cooperative. The host measures elapsed wall time (for example the
return value of ``pygame.time.Clock.tick``) and feeds it to
``GameClock.advance``. Each timer fires its callback once per elapsed
period, and each callback runs to completion before the next one starts.

Timers are explicit resources with two states. Level changes and resets go
through ``rearm`` or ``disarm``; pause and resume go through ``suspend`` and
``resume``, which keep the time already counted towards the next fire. A
stale callback can never fire after it was cancelled.
"""

from __future__ import annotations

import enum
from typing import Callable


class TimerState(enum.Enum):
    ARMED = "armed"
    DISARMED = "disarmed"


def descent_period_ms(
    level: int,
    base_ms: int = 1000,
    step_ms: int = 100,
    min_ms: int = 100,
) -> int:
    """Return the automatic descent interval for ``level``.

    The interval shrinks by ``step_ms`` per level above 1 and never drops
    below ``min_ms``:  ``max(min_ms, base_ms - (level - 1) * step_ms)``.
    """
    return max(min_ms, base_ms - (level - 1) * step_ms)


class Timer:
    """A periodic callback driven by ``advance``.

    Attributes:
        callback: Zero-argument function invoked on each fire.
        period_ms: Interval between fires while armed.
        state: ARMED or DISARMED.
        coalesce: Fire at most once per ``advance`` and drop the periods
            that were missed, instead of catching up on every one.
    """

    def __init__(self, callback: Callable[[], None], coalesce: bool = False) -> None:
        self.callback = callback
        self.coalesce = coalesce
        self.period_ms: float = 0.0
        self.state = TimerState.DISARMED
        self._elapsed: float = 0.0
        self._generation = 0

    @property
    def armed(self) -> bool:
        return self.state is TimerState.ARMED

    def rearm(self, period_ms: float) -> None:
        """Arm the timer with a fresh period, discarding accumulated time."""
        if period_ms <= 0:
            raise ValueError(f"timer period must be positive, got {period_ms}")
        self.period_ms = period_ms
        self._elapsed = 0.0
        self.state = TimerState.ARMED
        self._generation += 1

    def disarm(self) -> None:
        self.state = TimerState.DISARMED
        self._elapsed = 0.0
        self._generation += 1

    def suspend(self) -> None:
        """Stop firing but keep the time counted towards the next fire."""
        self.state = TimerState.DISARMED
        self._generation += 1

    def resume(self) -> None:
        """Arm a suspended timer again with its period and counted time."""
        if self.period_ms <= 0:
            raise ValueError("timer was never armed; call rearm() first")
        self.state = TimerState.ARMED
        self._generation += 1

    def advance(self, dt_ms: float) -> int:
        """Let ``dt_ms`` milliseconds pass, firing once per full period.

        A coalescing timer fires at most once, however many periods passed.
        If a callback disarms, suspends or re-arms this timer, the remaining
        fires owed for this interval are dropped.

        Returns:
            How many times the callback fired.
        """
        if not self.armed or dt_ms <= 0:
            return 0
        self._elapsed += dt_ms
        if self.coalesce and self._elapsed >= self.period_ms:
            self._elapsed %= self.period_ms
            self.callback()
            return 1
        fired = 0
        while self.armed and self._elapsed >= self.period_ms:
            self._elapsed -= self.period_ms
            generation = self._generation
            fired += 1
            self.callback()
            if self._generation != generation:
                break
        return fired


class GameClock:
    """Owns the descent and render timers of one game.

    Attributes:
        descent: Timer that pulls the active piece down one row.
        render: Coalescing timer that publishes a snapshot to the host.
        render_period_ms: Render cadence derived from the target FPS.
    """

    def __init__(
        self,
        on_descent: Callable[[], None],
        on_render: Callable[[], None],
        fps: int = 60,
        base_descent_ms: int = 1000,
        descent_step_ms: int = 100,
        min_descent_ms: int = 100,
    ) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.descent = Timer(on_descent)
        self.render = Timer(on_render, coalesce=True)
        self.render_period_ms = 1000.0 / fps
        self.base_descent_ms = base_descent_ms
        self.descent_step_ms = descent_step_ms
        self.min_descent_ms = min_descent_ms

    @property
    def running(self) -> bool:
        return self.descent.armed or self.render.armed

    def period_for(self, level: int) -> int:
        return descent_period_ms(
            level, self.base_descent_ms, self.descent_step_ms, self.min_descent_ms
        )

    def start(self, level: int) -> None:
        """Arm both timers fresh for ``level``."""
        self.render.rearm(self.render_period_ms)
        self.descent.rearm(self.period_for(level))

    def set_level(self, level: int) -> None:
        """Restart the descent timer at the cadence for ``level``."""
        if self.descent.armed:
            self.descent.rearm(self.period_for(level))

    def stop(self) -> None:
        self.descent.disarm()
        self.render.disarm()

    def pause(self) -> None:
        """Suspend both timers, keeping the progress towards their next fire."""
        self.descent.suspend()
        self.render.suspend()

    def resume(self) -> None:
        self.render.resume()
        self.descent.resume()

    def advance(self, dt_ms: float) -> None:
        """Feed elapsed host time to both timers, descent first.

        The render timer then observes the state the descent left behind.
        A descent callback that stops the clock (game over) prevents any
        further fires, render included.
        """
        self.descent.advance(dt_ms)
        self.render.advance(dt_ms)
