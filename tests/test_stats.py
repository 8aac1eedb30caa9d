"""Tests for the statistics snapshot and format helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from tamostudy.database.db import get_session
from tamostudy.database.models import (
    AchievementUnlock, DailyStats, FocusSession, Profile,
)
from tamostudy.gamification.stats import Stats, format_focus_time, load_stats


TODAY = date(2026, 3, 18)   # a Wednesday


def _daily(day: date, seconds: int) -> None:
    with get_session() as db:
        db.add(DailyStats(date=day, focus_seconds=seconds))


# ═══════════════════════════════════════════════════════════════════════
#  FORMAT HELPERS
# ═══════════════════════════════════════════════════════════════════════


class TestFormatFocusTime:
    def test_zero(self):
        assert format_focus_time(0) == "0m"

    def test_negative(self):
        assert format_focus_time(-300) == "0m"

    def test_under_a_minute(self):
        assert format_focus_time(59) == "0m"

    def test_minutes_only(self):
        assert format_focus_time(45 * 60) == "45m"

    def test_exact_hour(self):
        assert format_focus_time(3600) == "1h 0m"

    def test_hours_and_minutes(self):
        assert format_focus_time(7500) == "2h 5m"


# ═══════════════════════════════════════════════════════════════════════
#  LOAD STATS
# ═══════════════════════════════════════════════════════════════════════


class TestLoadStats:
    def test_fresh_profile(self):
        stats = load_stats(TODAY)
        assert stats.total_seconds == 0
        assert stats.today_seconds == 0
        assert stats.month_seconds == 0
        assert stats.completed_sessions == 0
        assert stats.achievements_label == "0/11"
        assert len(stats.profile_code) == 5

    def test_profile_fields(self):
        with get_session() as db:
            p = db.query(Profile).first()
            p.name = "Anthony"
            p.profile_code = 42
            p.pet_name = "Lisa"
            p.total_seconds = 50 * 3600
            p.tokens = 1234
        stats = load_stats(TODAY)
        assert stats.username == "Anthony"
        assert stats.profile_code == "00042"
        assert stats.pet_name == "Lisa"
        assert stats.pet_level == 2
        assert stats.tokens == 1234

    def test_today_and_month(self):
        _daily(TODAY, 1800)
        _daily(TODAY - timedelta(days=3), 600)
        _daily(date(2026, 2, 28), 9999)  # previous month
        stats = load_stats(TODAY)
        assert stats.today_seconds == 1800
        assert stats.month_seconds == 2400

    def test_weekly_is_last_seven_days(self):
        _daily(TODAY, 60)
        _daily(TODAY - timedelta(days=6), 120)
        _daily(TODAY - timedelta(days=7), 999)
        stats = load_stats(TODAY)
        assert len(stats.weekly) == 7
        assert stats.weekly[0] == ("Thu", 120)
        assert stats.weekly[-1] == ("Wed", 60)
        assert sum(s for _, s in stats.weekly) == 180

    def test_completed_sessions(self):
        with get_session() as db:
            db.add(FocusSession(start_time=datetime(2026, 3, 18, 9), completed=True))
            db.add(FocusSession(start_time=datetime(2026, 3, 18, 10), completed=False))
        assert load_stats(TODAY).completed_sessions == 1

    def test_achievement_count(self):
        with get_session() as db:
            db.add(AchievementUnlock(key="tamo_love"))
        assert load_stats(TODAY).achievements_label == "1/11"

    def test_no_profile(self):
        with get_session() as db:
            db.query(Profile).delete()
        stats = load_stats(TODAY)
        assert stats.username == ""
        assert stats.total_seconds == 0


def test_stats_defaults():
    s = Stats()
    assert s.weekly == []
    assert s.achievements_total == 11
