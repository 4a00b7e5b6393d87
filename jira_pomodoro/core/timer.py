"""Countdown timer state machine driving a single pomodoro.

``Idle -> Running -> {Expired | Stopped}``. The countdown is advanced by
ticks carrying the token handed out by :meth:`CountdownTimer.start`; arming a
new countdown invalidates older tokens, so a stale tick source can never
advance or finish the current one.

Elapsed time is read from a monotonic clock, not counted from ticks; late
ticks only delay the expiry check.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .config import DEFAULT_POMODORO_MINUTES
from .models import IssueModel, TimerState

Clock = Callable[[], float]


class TimerPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"
    STOPPED = "stopped"


@dataclass(slots=True, frozen=True)
class TimerResult:
    issue: IssueModel
    phase: TimerPhase
    elapsed_seconds: int
    duration_seconds: int


def format_clock(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class CountdownTimer:
    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._token = 0
        self.phase = TimerPhase.IDLE
        self.issue: IssueModel | None = None
        self.duration_seconds = DEFAULT_POMODORO_MINUTES * 60
        self._started_at: float | None = None
        self._final_remaining: int | None = None

    # ------------------ Lifecycle ------------------
    @property
    def token(self) -> int:
        return self._token

    @property
    def is_running(self) -> bool:
        return self.phase is TimerPhase.RUNNING

    def start(self, issue: IssueModel, minutes: int = DEFAULT_POMODORO_MINUTES) -> int:
        """Load a fresh countdown for ``issue`` and return the new tick token."""
        if minutes <= 0:
            raise ValueError("pomodoro length must be positive")
        self._token += 1
        self.issue = issue
        self.duration_seconds = int(minutes) * 60
        self._started_at = self._clock()
        self._final_remaining = None
        self.phase = TimerPhase.RUNNING
        return self._token

    def tick(self, token: int) -> TimerResult | None:
        """Advance the countdown; returns a result once it has expired."""
        if token != self._token or not self.is_running:
            return None
        if self.remaining_seconds > 0:
            return None
        return self._finish(TimerPhase.EXPIRED, remaining=0)

    def stop(self) -> TimerResult | None:
        """Stop early; the result reports only the time actually spent."""
        if not self.is_running:
            return None
        return self._finish(TimerPhase.STOPPED, remaining=self.remaining_seconds)

    def cancel(self) -> None:
        """Tear down without producing a result (logout, view teardown)."""
        self._token += 1
        self.phase = TimerPhase.IDLE
        self.issue = None
        self._started_at = None
        self._final_remaining = None

    def _finish(self, phase: TimerPhase, remaining: int) -> TimerResult:
        if self.issue is None:
            raise RuntimeError("timer has no active issue")
        self._token += 1
        self._final_remaining = remaining
        self.phase = phase
        return TimerResult(
            issue=self.issue,
            phase=phase,
            elapsed_seconds=self.duration_seconds - remaining,
            duration_seconds=self.duration_seconds,
        )

    # ------------------ Derived values ------------------
    @property
    def remaining_seconds(self) -> int:
        if self._final_remaining is not None:
            return self._final_remaining
        if self._started_at is None:
            return self.duration_seconds
        spent = int(self._clock() - self._started_at)
        return min(self.duration_seconds, max(0, self.duration_seconds - spent))

    @property
    def spent_seconds(self) -> int:
        return self.duration_seconds - self.remaining_seconds

    @property
    def state(self) -> TimerState:
        return TimerState(remaining_seconds=self.remaining_seconds, is_running=self.is_running)

    @property
    def display(self) -> str:
        return format_clock(self.remaining_seconds)

    @property
    def second_hand_angle(self) -> float:
        return float((self.spent_seconds % 60) * 6)

    @property
    def minute_hand_angle(self) -> float:
        if not self.duration_seconds:
            return 0.0
        return self.spent_seconds / self.duration_seconds * 360.0

    @property
    def caption(self) -> str:
        summary = self.issue.summary if self.issue else ""
        return f"{self.display} - {summary}" if summary else self.display
