"""Statistics snapshot for the profile screen."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from sqlalchemy import func

from ..database.db import get_session
from ..database.models import AchievementUnlock, DailyStats, FocusSession, Profile
from ..profile import level_for_seconds
from .achievements import ACHIEVEMENTS


# ═══════════════════════════════════════════════════════════════════════════
#  FORMAT HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def format_focus_time(total_seconds: int) -> str:
    """7500 → '2h 5m', 0 → '0m', 3600 → '1h 0m'."""
    total_minutes = total_seconds // 60
    if total_minutes <= 0:
        return "0m"
    hours = total_minutes // 60
    mins = total_minutes % 60
    if hours == 0:
        return f"{mins}m"
    return f"{hours}h {mins}m"


# ═══════════════════════════════════════════════════════════════════════════
#  SNAPSHOT
# ═══════════════════════════════════════════════════════════════════════════


@dataclass
class Stats:
    """Everything the statistics screen shows."""

    username: str = ""
    profile_code: str = "00000"
    join_date: date | None = None
    pet_name: str = ""
    pet_level: int = 0
    pet_happiness: int = 0
    pet_hunger: int = 0
    tokens: int = 0
    # Focus time, in seconds
    today_seconds: int = 0
    month_seconds: int = 0
    total_seconds: int = 0
    completed_sessions: int = 0
    # Achievements
    achievements_unlocked: int = 0
    achievements_total: int = len(ACHIEVEMENTS)
    # Last 7 days, oldest first: (weekday label, seconds)
    weekly: list[tuple[str, int]] = field(default_factory=list)

    @property
    def achievements_label(self) -> str:
        return f"{self.achievements_unlocked}/{self.achievements_total}"


def load_stats(today: date | None = None) -> Stats:
    """Run all queries in a single session and return a filled snapshot."""
    stats = Stats()
    today = today or date.today()
    month_start = today.replace(day=1)

    with get_session() as db:
        # ── Profile ───────────────────────────────────────────────────
        profile: Profile | None = db.query(Profile).first()
        if profile:
            stats.username = profile.name
            stats.profile_code = f"{profile.profile_code:05d}"
            stats.join_date = profile.join_date
            stats.pet_name = profile.pet_name
            stats.pet_level = level_for_seconds(profile.total_seconds)
            stats.pet_happiness = profile.pet_happiness
            stats.pet_hunger = profile.pet_hunger
            stats.tokens = profile.tokens
            stats.total_seconds = profile.total_seconds

        # ── Today / this month ────────────────────────────────────────
        today_row: DailyStats | None = (
            db.query(DailyStats).filter_by(date=today).first()
        )
        if today_row:
            stats.today_seconds = today_row.focus_seconds

        stats.month_seconds = (
            db.query(func.coalesce(func.sum(DailyStats.focus_seconds), 0))
            .filter(DailyStats.date >= month_start, DailyStats.date <= today)
            .scalar()
        ) or 0

        # ── Last 7 days ───────────────────────────────────────────────
        for offset in range(6, -1, -1):
            day = today - timedelta(days=offset)
            row: DailyStats | None = (
                db.query(DailyStats).filter_by(date=day).first()
            )
            stats.weekly.append((day.strftime("%a"), row.focus_seconds if row else 0))

        # ── Sessions & achievements ───────────────────────────────────
        stats.completed_sessions = (
            db.query(FocusSession).filter_by(completed=True).count()
        )
        stats.achievements_unlocked = db.query(AchievementUnlock).count()

    return stats
