"""Focus-session state machine for TamoStudy.

Phases
------
IDLE       No session running.
FOCUSING   Focus countdown.
ON_BREAK   Pomodoro break countdown.

Transitions
-----------
IDLE → FOCUSING                    (start)
FOCUSING → ON_BREAK                (Pomodoro focus ends, sessions left)
ON_BREAK → FOCUSING                (Pomodoro break ends)
FOCUSING → IDLE                    (last focus phase ends)
{FOCUSING, ON_BREAK} → IDLE        (break_now)

``TimerSession`` knows nothing about clocks or widgets.  A host calls
:meth:`TimerSession.tick` once per second and listens for
:class:`PhaseChange` notifications.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, NamedTuple


# ── enums ─────────────────────────────────────────────────────────────────


class Mode(Enum):
    CUSTOM = "custom"
    INTERVAL_5 = "interval_5"
    POMODORO = "pomodoro"


class Phase(Enum):
    IDLE = "idle"
    FOCUSING = "focusing"
    ON_BREAK = "on_break"


class TickEvent(Enum):
    CONTINUE = "continue"
    PHASE_ENDED = "phase_ended"
    ALL_SESSIONS_COMPLETE = "all_sessions_complete"


# ── errors ────────────────────────────────────────────────────────────────


class InvalidTimerConfig(ValueError):
    """Raised for durations or session counts the timer cannot run."""


class TimerStateError(RuntimeError):
    """Raised when an operation is not valid in the current phase."""


# ── value types ───────────────────────────────────────────────────────────

INTERVAL_STEP = 5  # minutes


class Elapsed(NamedTuple):
    minutes: int
    seconds: int

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60 + self.seconds


@dataclass(frozen=True)
class TimerConfig:
    """Durations for one timer run.

    ``break_minutes`` and ``sessions`` only matter in Pomodoro mode.
    """

    focus_minutes: int
    focus_seconds: int = 0
    break_minutes: int = 0
    sessions: int = 1

    @classmethod
    def custom(cls, minutes: int, seconds: int = 0) -> TimerConfig:
        return cls(focus_minutes=minutes, focus_seconds=seconds)

    @classmethod
    def interval(cls, minutes: int) -> TimerConfig:
        return cls(focus_minutes=minutes)

    @classmethod
    def pomodoro(
        cls, session_minutes: int, break_minutes: int, sessions: int,
    ) -> TimerConfig:
        return cls(
            focus_minutes=session_minutes,
            break_minutes=break_minutes,
            sessions=sessions,
        )

    def validate(self, mode: Mode) -> None:
        if self.focus_minutes < 0 or self.focus_seconds < 0:
            raise InvalidTimerConfig("durations must not be negative")
        if self.focus_seconds > 59:
            raise InvalidTimerConfig(
                f"seconds must be 0-59, got {self.focus_seconds}"
            )
        if self.focus_minutes == 0 and self.focus_seconds == 0:
            raise InvalidTimerConfig("focus duration must be positive")

        if mode is Mode.INTERVAL_5:
            if self.focus_seconds or self.focus_minutes % INTERVAL_STEP:
                raise InvalidTimerConfig(
                    f"interval countdown needs a multiple of "
                    f"{INTERVAL_STEP} minutes, got {self.focus_minutes}"
                )
        elif mode is Mode.POMODORO:
            if self.sessions < 1:
                raise InvalidTimerConfig("pomodoro needs at least one session")
            if self.sessions > 1 and self.break_minutes <= 0:
                raise InvalidTimerConfig("pomodoro break must be positive")


@dataclass(frozen=True)
class PhaseChange:
    """One phase transition, delivered to every listener."""

    previous: Phase
    phase: Phase
    reason: str                # "started" | "completed" | "interrupted"
    elapsed: Elapsed           # time spent in the phase that just ended
    session_index: int         # 1-based Pomodoro session after the change
    total_sessions: int


Listener = Callable[[PhaseChange], None]


# ── state machine ─────────────────────────────────────────────────────────


class TimerSession:
    """Countdown state for one focus run.

    ``tick()`` is expected once per second while the phase is not IDLE.
    """

    def __init__(self) -> None:
        self._mode: Mode = Mode.CUSTOM
        self._config: TimerConfig | None = None
        self._phase: Phase = Phase.IDLE

        self._remaining_minutes: int = 0
        self._remaining_seconds: int = 0
        self._elapsed_minutes: int = 0
        self._elapsed_seconds: int = 0

        self._total_sessions: int = 0
        self._current_session: int = 0

        self._listeners: list[Listener] = []

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def config(self) -> TimerConfig | None:
        return self._config

    @property
    def remaining_minutes(self) -> int:
        return self._remaining_minutes

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def remaining(self) -> int:
        """Seconds left in the current phase."""
        return self._remaining_minutes * 60 + self._remaining_seconds

    @property
    def elapsed(self) -> Elapsed:
        """Time spent in the current phase."""
        return Elapsed(self._elapsed_minutes, self._elapsed_seconds)

    @property
    def total_sessions(self) -> int:
        return self._total_sessions

    @property
    def current_session(self) -> int:
        """Which Pomodoro focus session is active (1-based)."""
        return self._current_session

    @property
    def display(self) -> tuple[str, str]:
        """Remaining time as zero-padded ``("MM", "SS")``."""
        return (
            f"{self._remaining_minutes:02d}",
            f"{self._remaining_seconds:02d}",
        )

    # ══════════════════════════════════════════════════════════════════
    #  LISTENERS
    # ══════════════════════════════════════════════════════════════════

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, mode: Mode, config: TimerConfig) -> None:
        """Begin a run.  Only valid from IDLE."""
        if self._phase is not Phase.IDLE:
            raise TimerStateError(f"cannot start while {self._phase.value}")
        config.validate(mode)

        self._mode = mode
        self._config = config
        self._total_sessions = config.sessions if mode is Mode.POMODORO else 1
        self._current_session = 1
        self._begin_phase(
            Phase.FOCUSING, config.focus_minutes, config.focus_seconds,
        )
        self._notify(Phase.IDLE, "started", Elapsed(0, 0))

    def tick(self) -> TickEvent | None:
        """Advance one second.  Returns ``None`` when IDLE."""
        if self._phase is Phase.IDLE:
            return None

        self._elapsed_seconds += 1
        if self._elapsed_seconds == 60:
            self._elapsed_minutes += 1
            self._elapsed_seconds = 0

        if self._remaining_seconds == 0:
            self._remaining_minutes -= 1
            self._remaining_seconds = 59
        else:
            self._remaining_seconds -= 1

        if self._remaining_minutes == 0 and self._remaining_seconds == 0:
            return self._end_phase()
        return TickEvent.CONTINUE

    def break_now(self) -> Elapsed:
        """End the current phase early and return to IDLE.

        Returns the time spent in the interrupted phase.
        """
        if self._phase is Phase.IDLE:
            return Elapsed(0, 0)
        previous = self._phase
        elapsed = self.elapsed
        self._reset()
        self._notify(previous, "interrupted", elapsed)
        return elapsed

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _begin_phase(self, phase: Phase, minutes: int, seconds: int) -> None:
        self._phase = phase
        self._remaining_minutes = minutes
        self._remaining_seconds = seconds
        self._elapsed_minutes = 0
        self._elapsed_seconds = 0

    def _end_phase(self) -> TickEvent:
        ended = self._phase
        elapsed = self.elapsed
        config = self._config

        if self._mode is Mode.POMODORO:
            if (
                ended is Phase.FOCUSING
                and self._current_session < self._total_sessions
            ):
                self._begin_phase(Phase.ON_BREAK, config.break_minutes, 0)
                self._notify(ended, "completed", elapsed)
                return TickEvent.PHASE_ENDED
            if ended is Phase.ON_BREAK:
                self._current_session += 1
                self._begin_phase(
                    Phase.FOCUSING, config.focus_minutes, config.focus_seconds,
                )
                self._notify(ended, "completed", elapsed)
                return TickEvent.PHASE_ENDED

        self._reset()
        self._notify(ended, "completed", elapsed)
        return TickEvent.ALL_SESSIONS_COMPLETE

    def _reset(self) -> None:
        self._begin_phase(Phase.IDLE, 0, 0)

    def _notify(self, previous: Phase, reason: str, elapsed: Elapsed) -> None:
        change = PhaseChange(
            previous=previous,
            phase=self._phase,
            reason=reason,
            elapsed=elapsed,
            session_index=self._current_session,
            total_sessions=self._total_sessions,
        )
        for listener in list(self._listeners):
            listener(change)
