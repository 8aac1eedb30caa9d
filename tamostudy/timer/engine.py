"""Qt host for the focus-session state machine.

``FocusTimer`` owns one :class:`~tamostudy.timer.session.TimerSession` and
a one-second ``QTimer`` that drives it.  It listens to the session's phase
changes and fans them out to the collaborators around the timer:

- profile sink      focus time is credited through ``ProfileManager.report``
                    and logged as a ``FocusSession`` row
- sound sink        the configured alarm plays when a phase runs out
- controls sink     ``controls_enabled(False)`` while a run is active
- image sink        ``pet_image_changed("focus" | "idle")``

Alarm failures are logged and never stop the timer.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .session import (
    Elapsed, Mode, Phase, PhaseChange, TimerConfig, TimerSession,
)

logger = logging.getLogger(__name__)

PET_IMAGE_FOCUS = "focus"
PET_IMAGE_IDLE = "idle"


class FocusTimer(QObject):
    """Drives a :class:`TimerSession` from the Qt event loop.

    Signals
    -------
    tick(minutes: str, seconds: str)
        Emitted every second with the zero-padded remaining time.
    phase_changed(change: PhaseChange)
        Emitted on every phase transition.
    controls_enabled(enabled: bool)
        False when a run starts, True when it returns to IDLE.
    pet_image_changed(image: str)
        ``"focus"`` while focusing, ``"idle"`` otherwise.
    session_finished(data: dict)
        Emitted when a run returns to IDLE.  Keys: ``mode``, ``reason``,
        ``focus_seconds``, ``sessions_completed``, ``total_sessions``.
    achievements_unlocked(achievements: list)
        Newly earned achievements, checked when a run ends.
    """

    tick = pyqtSignal(str, str)
    phase_changed = pyqtSignal(object)
    controls_enabled = pyqtSignal(bool)
    pet_image_changed = pyqtSignal(str)
    session_finished = pyqtSignal(object)
    achievements_unlocked = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        db_enabled: bool = True,
        profile_manager=None,
        achievement_manager=None,
        sound_manager=None,
        alarm: str = "soft",
    ) -> None:
        super().__init__(parent)

        self._db_enabled = db_enabled
        if db_enabled:
            from ..gamification.achievements import AchievementManager
            from ..profile import ProfileManager

            profile_manager = profile_manager or ProfileManager()
            achievement_manager = achievement_manager or AchievementManager()
        self._profile = profile_manager
        self._achievements = achievement_manager
        self._sound = sound_manager
        self._alarm = alarm

        self._session = TimerSession()
        self._session.add_listener(self._on_phase_change)

        # ── per-run bookkeeping ───────────────────────────────────────
        self._phase_started_at: datetime | None = None
        self._run_focus_seconds: int = 0
        self._run_sessions_completed: int = 0

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(1000)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def session(self) -> TimerSession:
        return self._session

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def display(self) -> tuple[str, str]:
        return self._session.display

    @property
    def is_running(self) -> bool:
        return self._session.phase is not Phase.IDLE

    @property
    def alarm(self) -> str:
        return self._alarm

    @alarm.setter
    def alarm(self, value: str) -> None:
        self._alarm = value

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, mode: Mode, config: TimerConfig) -> None:
        """Start a focus run.

        Raises ``InvalidTimerConfig`` for bad input and ``TimerStateError``
        while a run is active; the active run is left untouched.
        """
        self._session.start(mode, config)
        self._run_focus_seconds = 0
        self._run_sessions_completed = 0
        logger.info(
            "Focus started: %s %d:%02d x%d",
            mode.value, config.focus_minutes, config.focus_seconds,
            self._session.total_sessions,
        )
        self.tick.emit(*self._session.display)
        self._qt_timer.start()

    def break_now(self) -> Elapsed:
        """Break focus early.  Returns the time spent in the broken phase."""
        self._qt_timer.stop()
        return self._session.break_now()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        event = self._session.tick()
        if event is None:
            self._qt_timer.stop()
            return
        self.tick.emit(*self._session.display)

    def _on_phase_change(self, change: PhaseChange) -> None:
        if change.previous is Phase.FOCUSING:
            self._record_focus(change)

        if change.reason == "completed":
            self._play_alarm()
            if change.previous is Phase.ON_BREAK:
                logger.info("Break is over. Time to get back to focus!")

        if change.phase is not Phase.IDLE:
            self._phase_started_at = datetime.now()

        self.phase_changed.emit(change)
        self.pet_image_changed.emit(
            PET_IMAGE_FOCUS if change.phase is Phase.FOCUSING else PET_IMAGE_IDLE
        )

        if change.previous is Phase.IDLE:
            self.controls_enabled.emit(False)
        elif change.phase is Phase.IDLE:
            self._finish_run(change)

    def _finish_run(self, change: PhaseChange) -> None:
        # before session_finished: a slot may start the next run
        self._qt_timer.stop()
        self._phase_started_at = None
        logger.info(
            "Focus %s after %ds", change.reason, self._run_focus_seconds,
        )
        self.controls_enabled.emit(True)
        self.session_finished.emit({
            "mode": self._session.mode.value,
            "reason": change.reason,
            "focus_seconds": self._run_focus_seconds,
            "sessions_completed": self._run_sessions_completed,
            "total_sessions": change.total_sessions,
        })

        if self._achievements is not None:
            unlocked = self._achievements.check_and_unlock()
            if unlocked:
                self.achievements_unlocked.emit(unlocked)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — collaborators
    # ══════════════════════════════════════════════════════════════════

    def _record_focus(self, change: PhaseChange) -> None:
        elapsed = change.elapsed
        completed = change.reason == "completed"
        self._run_focus_seconds += elapsed.total_seconds
        if completed:
            self._run_sessions_completed += 1

        if elapsed.total_seconds == 0:
            return
        if self._profile is not None:
            self._profile.report(
                elapsed.minutes, elapsed.seconds, completed=completed,
            )
        if self._db_enabled:
            self._persist_focus(elapsed, completed, change)

    def _play_alarm(self) -> None:
        if self._sound is None:
            return
        try:
            self._sound.play(self._alarm)
        except Exception:
            logger.warning("Could not play alarm %r", self._alarm, exc_info=True)

    def _persist_focus(
        self, elapsed: Elapsed, completed: bool, change: PhaseChange,
    ) -> None:
        from ..database.db import get_session
        from ..database.models import FocusSession

        end_time = datetime.now()
        start_time = self._phase_started_at or (
            end_time - timedelta(seconds=elapsed.total_seconds)
        )
        with get_session() as db:
            db.add(FocusSession(
                start_time=start_time,
                end_time=end_time,
                duration_seconds=elapsed.total_seconds,
                mode=self._session.mode.value,
                session_index=change.session_index,
                completed=completed,
            ))
