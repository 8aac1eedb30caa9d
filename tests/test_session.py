"""Tests for the pure focus-session state machine.

Covers: start validation, countdown/borrow arithmetic, elapsed tracking,
the three modes, Pomodoro focus/break alternation, break_now, display
strings, and listener notifications.
"""

import pytest

from tamostudy.timer.session import (
    Elapsed,
    InvalidTimerConfig,
    Mode,
    Phase,
    TickEvent,
    TimerConfig,
    TimerSession,
    TimerStateError,
)

from helpers import SignalCollector, run_until_done


@pytest.fixture
def session():
    return TimerSession()


def _ticks_to_finish(session: TimerSession) -> int:
    count = 0
    while True:
        count += 1
        if session.tick() is TickEvent.ALL_SESSIONS_COMPLETE:
            return count


# ═══════════════════════════════════════════════════════════════════════════
#  START
# ═══════════════════════════════════════════════════════════════════════════


class TestStart:

    def test_initial_phase_is_idle(self, session):
        assert session.phase is Phase.IDLE
        assert session.remaining == 0

    def test_start_sets_focusing(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(1, 30))
        assert session.phase is Phase.FOCUSING
        assert session.remaining_minutes == 1
        assert session.remaining_seconds == 30
        assert session.elapsed == Elapsed(0, 0)

    def test_start_twice_raises(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(1))
        with pytest.raises(TimerStateError):
            session.start(Mode.CUSTOM, TimerConfig.custom(1))

    def test_custom_mode_has_one_session(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(10))
        assert session.total_sessions == 1
        assert session.current_session == 1

    def test_pomodoro_session_count(self, session):
        session.start(Mode.POMODORO, TimerConfig.pomodoro(25, 5, 4))
        assert session.total_sessions == 4
        assert session.current_session == 1

    @pytest.mark.parametrize("config", [
        TimerConfig.custom(0, 0),
        TimerConfig.custom(-1, 0),
        TimerConfig.custom(1, 60),
        TimerConfig.custom(0, -5),
    ])
    def test_bad_custom_config_rejected(self, session, config):
        with pytest.raises(InvalidTimerConfig):
            session.start(Mode.CUSTOM, config)
        assert session.phase is Phase.IDLE

    @pytest.mark.parametrize("minutes", [0, 3, 12])
    def test_interval_needs_multiple_of_five(self, session, minutes):
        with pytest.raises(InvalidTimerConfig):
            session.start(Mode.INTERVAL_5, TimerConfig.interval(minutes))

    def test_interval_accepts_multiple_of_five(self, session):
        session.start(Mode.INTERVAL_5, TimerConfig.interval(15))
        assert session.display == ("15", "00")

    def test_pomodoro_needs_a_session(self, session):
        with pytest.raises(InvalidTimerConfig):
            session.start(Mode.POMODORO, TimerConfig.pomodoro(25, 5, 0))

    def test_pomodoro_needs_a_break(self, session):
        with pytest.raises(InvalidTimerConfig):
            session.start(Mode.POMODORO, TimerConfig.pomodoro(25, 0, 2))

    def test_single_pomodoro_without_break_is_fine(self, session):
        session.start(Mode.POMODORO, TimerConfig.pomodoro(25, 0, 1))
        assert session.phase is Phase.FOCUSING

    def test_invalid_config_is_a_value_error(self):
        assert issubclass(InvalidTimerConfig, ValueError)


# ═══════════════════════════════════════════════════════════════════════════
#  TICK / COUNTDOWN
# ═══════════════════════════════════════════════════════════════════════════


class TestCountdown:

    def test_tick_when_idle_is_noop(self, session):
        assert session.tick() is None
        assert session.phase is Phase.IDLE

    def test_tick_decrements_seconds(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(1, 30))
        assert session.tick() is TickEvent.CONTINUE
        assert session.display == ("01", "29")

    def test_seconds_borrow_from_minutes(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(2, 0))
        session.tick()
        assert session.remaining_minutes == 1
        assert session.remaining_seconds == 59

    def test_remaining_seconds_stay_in_range(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(3, 7))
        while session.phase is not Phase.IDLE:
            assert 0 <= session.remaining_seconds <= 59
            session.tick()

    def test_elapsed_carries_into_minutes(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(5))
        for _ in range(61):
            session.tick()
        assert session.elapsed == Elapsed(1, 1)

    @pytest.mark.parametrize("minutes,seconds", [
        (0, 1), (0, 59), (1, 0), (1, 30), (2, 59), (10, 0),
    ])
    def test_phase_ends_after_exact_tick_count(self, session, minutes, seconds):
        session.start(Mode.CUSTOM, TimerConfig.custom(minutes, seconds))
        assert _ticks_to_finish(session) == minutes * 60 + seconds

    def test_custom_ninety_seconds(self, session):
        """start(Custom, 1:30) → 90 ticks → complete, elapsed (1, 30)."""
        changes = SignalCollector()
        session.add_listener(changes)
        session.start(Mode.CUSTOM, TimerConfig.custom(1, 30))

        events = [session.tick() for _ in range(90)]

        assert events[:-1] == [TickEvent.CONTINUE] * 89
        assert events[-1] is TickEvent.ALL_SESSIONS_COMPLETE
        assert session.phase is Phase.IDLE
        assert changes.last.reason == "completed"
        assert changes.last.elapsed == Elapsed(1, 30)

    def test_interval_completes_like_custom(self, session):
        session.start(Mode.INTERVAL_5, TimerConfig.interval(5))
        assert _ticks_to_finish(session) == 300
        assert session.phase is Phase.IDLE

    def test_display_is_zero_padded(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(9, 5))
        assert session.display == ("09", "05")


# ═══════════════════════════════════════════════════════════════════════════
#  POMODORO
# ═══════════════════════════════════════════════════════════════════════════


class TestPomodoro:

    def test_focus_then_break(self, session):
        session.start(Mode.POMODORO, TimerConfig.pomodoro(1, 1, 2))
        events = [session.tick() for _ in range(60)]
        assert events[-1] is TickEvent.PHASE_ENDED
        assert session.phase is Phase.ON_BREAK
        assert session.display == ("01", "00")
        assert session.current_session == 1

    def test_break_then_next_session(self, session):
        session.start(Mode.POMODORO, TimerConfig.pomodoro(1, 1, 2))
        for _ in range(120):
            session.tick()
        assert session.phase is Phase.FOCUSING
        assert session.current_session == 2

    @pytest.mark.parametrize("sessions", [1, 2, 3, 5])
    def test_n_sessions_give_n_focus_and_n_minus_1_breaks(self, session, sessions):
        changes = SignalCollector()
        session.add_listener(changes)
        session.start(Mode.POMODORO, TimerConfig.pomodoro(1, 2, sessions))

        events = run_until_done(session)

        completed = [c for c in changes.items if c.reason == "completed"]
        focus = [c for c in completed if c.previous is Phase.FOCUSING]
        breaks = [c for c in completed if c.previous is Phase.ON_BREAK]
        assert len(focus) == sessions
        assert len(breaks) == sessions - 1
        assert events.count(TickEvent.PHASE_ENDED) == 2 * sessions - 2
        assert events[-1] is TickEvent.ALL_SESSIONS_COMPLETE

    def test_total_ticks(self, session):
        session.start(Mode.POMODORO, TimerConfig.pomodoro(2, 1, 3))
        assert _ticks_to_finish(session) == 3 * 120 + 2 * 60

    def test_phases_alternate(self, session):
        phases = []
        session.add_listener(lambda change: phases.append(change.phase))
        session.start(Mode.POMODORO, TimerConfig.pomodoro(1, 1, 3))
        run_until_done(session)
        assert phases == [
            Phase.FOCUSING,
            Phase.ON_BREAK, Phase.FOCUSING,
            Phase.ON_BREAK, Phase.FOCUSING,
            Phase.IDLE,
        ]

    def test_elapsed_resets_each_phase(self, session):
        elapsed = []
        session.add_listener(lambda change: elapsed.append(change.elapsed))
        session.start(Mode.POMODORO, TimerConfig.pomodoro(2, 1, 2))
        run_until_done(session)
        assert elapsed == [Elapsed(0, 0), Elapsed(2, 0), Elapsed(1, 0), Elapsed(2, 0)]


# ═══════════════════════════════════════════════════════════════════════════
#  BREAK NOW
# ═══════════════════════════════════════════════════════════════════════════


class TestBreakNow:

    def test_break_from_focusing(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(10))
        for _ in range(75):
            session.tick()
        assert session.break_now() == Elapsed(1, 15)
        assert session.phase is Phase.IDLE

    def test_break_right_after_start(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(10))
        assert session.break_now() == Elapsed(0, 0)
        assert session.phase is Phase.IDLE

    def test_break_during_pomodoro_break(self, session):
        session.start(Mode.POMODORO, TimerConfig.pomodoro(1, 5, 3))
        for _ in range(70):
            session.tick()
        assert session.phase is Phase.ON_BREAK
        assert session.break_now() == Elapsed(0, 10)
        assert session.phase is Phase.IDLE

    def test_break_from_idle_is_noop(self, session):
        changes = SignalCollector()
        session.add_listener(changes)
        assert session.break_now() == Elapsed(0, 0)
        assert len(changes) == 0

    def test_break_notifies_interrupted(self, session):
        changes = SignalCollector()
        session.add_listener(changes)
        session.start(Mode.CUSTOM, TimerConfig.custom(5))
        session.tick()
        session.break_now()
        assert changes.last.reason == "interrupted"
        assert changes.last.previous is Phase.FOCUSING
        assert changes.last.phase is Phase.IDLE

    def test_restart_after_break(self, session):
        session.start(Mode.CUSTOM, TimerConfig.custom(5))
        session.break_now()
        session.start(Mode.INTERVAL_5, TimerConfig.interval(10))
        assert session.mode is Mode.INTERVAL_5
        assert session.display == ("10", "00")


# ═══════════════════════════════════════════════════════════════════════════
#  LISTENERS
# ═══════════════════════════════════════════════════════════════════════════


class TestListeners:

    def test_start_notifies(self, session):
        changes = SignalCollector()
        session.add_listener(changes)
        session.start(Mode.POMODORO, TimerConfig.pomodoro(25, 5, 4))
        change = changes.last
        assert change.previous is Phase.IDLE
        assert change.phase is Phase.FOCUSING
        assert change.reason == "started"
        assert change.session_index == 1
        assert change.total_sessions == 4

    def test_listener_sees_new_state(self, session):
        seen = []
        session.add_listener(lambda change: seen.append(session.phase))
        session.start(Mode.POMODORO, TimerConfig.pomodoro(1, 1, 2))
        for _ in range(60):
            session.tick()
        assert seen == [Phase.FOCUSING, Phase.ON_BREAK]

    def test_remove_listener(self, session):
        changes = SignalCollector()
        session.add_listener(changes)
        session.remove_listener(changes)
        session.start(Mode.CUSTOM, TimerConfig.custom(1))
        assert len(changes) == 0

    def test_listener_added_once(self, session):
        changes = SignalCollector()
        session.add_listener(changes)
        session.add_listener(changes)
        session.start(Mode.CUSTOM, TimerConfig.custom(1))
        assert len(changes) == 1
