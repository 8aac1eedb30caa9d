"""Achievements for TamoStudy.

Catalog
-------
Focus time (Tamo levels):

    The Beginning          24 h total focus   (level 1)
    Nothing can stop us!   72 h               (level 3)
    Never give up!        240 h               (level 10)
    Focus Ascension      1200 h               (level 50)

Customising:   Cosmetics (change border), Scenery Change (change background)
Care:          Tamo Full (max hunger), Tamo Love (max happiness)
Consistency:   1+ hour of focus on 3 / 7 / 30 consecutive days

``AchievementManager.check_and_unlock`` runs a linear threshold scan over
the catalog and records anything newly earned exactly once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..database.db import get_session
from ..database.models import AchievementUnlock, DailyStats, Profile

logger = logging.getLogger(__name__)


HOUR = 60 * 60
DEDICATED_DAY_SECONDS = HOUR   # a day "counts" with 1+ hour of focus


@dataclass(frozen=True)
class AchievementDef:
    key: str
    name: str
    description: str
    metric: str        # key into the progress snapshot
    threshold: int


ACHIEVEMENTS: list[AchievementDef] = [
    AchievementDef("the_beginning", "The Beginning",
                   "Earn Tamo level 1 (24 hours of focus).",
                   "total_seconds", 24 * HOUR),
    AchievementDef("nothing_can_stop_us", "Nothing can stop us!",
                   "Earn Tamo level 3 (72 hours of focus).",
                   "total_seconds", 72 * HOUR),
    AchievementDef("never_give_up", "Never give up!",
                   "Earn Tamo level 10 (240 hours of focus).",
                   "total_seconds", 240 * HOUR),
    AchievementDef("focus_ascension", "Focus Ascension",
                   "Earn Tamo level 50 (1200 hours of focus).",
                   "total_seconds", 1200 * HOUR),
    AchievementDef("cosmetics", "Cosmetics",
                   "Purchase and change your Tamo's border.",
                   "custom_border", 1),
    AchievementDef("scenery_change", "Scenery Change",
                   "Purchase and change your Tamo's background.",
                   "custom_background", 1),
    AchievementDef("tamo_full", "Tamo Full",
                   "Achieve maximum Tamo hunger.",
                   "pet_hunger", 10),
    AchievementDef("tamo_love", "Tamo Love",
                   "Achieve maximum Tamo happiness.",
                   "pet_happiness", 10),
    AchievementDef("dedicated", "Dedicated",
                   "Focus for 1+ hours for 3 days consecutively.",
                   "best_streak", 3),
    AchievementDef("building_consistency", "Building Consistency",
                   "Focus for 1+ hours for 7 days consecutively.",
                   "best_streak", 7),
    AchievementDef("tamo_scholar", "Tamo Scholar",
                   "Focus for 1+ hours for 30 days consecutively.",
                   "best_streak", 30),
]

_BY_KEY: dict[str, AchievementDef] = {a.key: a for a in ACHIEVEMENTS}


def get_achievement(key: str) -> AchievementDef | None:
    return _BY_KEY.get(key)


def longest_streak(days: list[date]) -> int:
    """Longest run of consecutive calendar days in *days*."""
    best = run = 0
    previous: date | None = None
    for day in sorted(set(days)):
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = day
    return best


class AchievementManager:
    """Checks thresholds and records unlocks in the database."""

    def check_and_unlock(self) -> list[AchievementDef]:
        """Unlock everything earned but not yet recorded.

        Returns the newly unlocked definitions in catalog order.
        """
        with get_session() as db:
            progress = self._progress(db)
            existing = {u.key for u in db.query(AchievementUnlock).all()}

            new_unlocks: list[AchievementDef] = []
            for achievement in ACHIEVEMENTS:
                if achievement.key in existing:
                    continue
                if progress[achievement.metric] >= achievement.threshold:
                    db.add(AchievementUnlock(
                        key=achievement.key,
                        unlocked_at=datetime.now(),
                    ))
                    new_unlocks.append(achievement)
                    logger.info("Achievement unlocked: %s", achievement.name)
            return new_unlocks

    def unlocked(self) -> list[AchievementDef]:
        with get_session() as db:
            keys = {u.key for u in db.query(AchievementUnlock).all()}
        return [a for a in ACHIEVEMENTS if a.key in keys]

    def is_unlocked(self, key: str) -> bool:
        with get_session() as db:
            return (
                db.query(AchievementUnlock).filter_by(key=key).count() > 0
            )

    # ── internal ─────────────────────────────────────────────────────

    @staticmethod
    def _progress(db) -> dict[str, int]:
        profile: Profile | None = db.query(Profile).first()
        if profile is None:
            return {a.metric: 0 for a in ACHIEVEMENTS}

        dedicated_days = [
            row.date for row in
            db.query(DailyStats)
            .filter(DailyStats.focus_seconds >= DEDICATED_DAY_SECONDS)
        ]
        return {
            "total_seconds": profile.total_seconds,
            "custom_border": int(profile.border_key != "default"),
            "custom_background": int(profile.background_key != "default"),
            "pet_hunger": profile.pet_hunger,
            "pet_happiness": profile.pet_happiness,
            "best_streak": longest_streak(dedicated_days),
        }
