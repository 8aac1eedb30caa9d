"""Timer package."""

from .session import (
    TimerSession,
    TimerConfig,
    Mode,
    Phase,
    TickEvent,
    PhaseChange,
    Elapsed,
    InvalidTimerConfig,
    TimerStateError,
)
from .engine import FocusTimer

__all__ = [
    "TimerSession",
    "TimerConfig",
    "Mode",
    "Phase",
    "TickEvent",
    "PhaseChange",
    "Elapsed",
    "InvalidTimerConfig",
    "TimerStateError",
    "FocusTimer",
]
