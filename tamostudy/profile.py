"""Profile bookkeeping: focus time, tokens, and the Tamo's wellbeing.

Focus Credit
------------
Every focus phase (finished or broken off) is reported through
:meth:`ProfileManager.report`:

- total focus time grows by the reported minutes and seconds
- 10 tokens per whole focused minute
- a report of 25 minutes or more makes the Tamo happier (+1, max 10)

Tamo Level
----------
One level per 24 hours of total focus time.  "The Beginning" (level 1)
needs 24 h, "Focus Ascension" (level 50) needs 1200 h.

Daily Roll-over
---------------
The first activity of a new day costs the Tamo hunger and happiness for
every day that passed, scaled by difficulty:

    easy 1   normal 2   hard 3      (points per day, each stat)

When both reach zero the Tamo leaves.  It is archived in ``PetHistory``
and a new one hatches under the same name.
"""

from __future__ import annotations

import logging
from datetime import date

from .database.db import get_session
from .database.models import (
    AchievementUnlock, DailyStats, FocusSession, InventoryItem, PetHistory,
    Profile,
)

logger = logging.getLogger(__name__)


# ── constants ────────────────────────────────────────────────────────────

TOKENS_PER_MINUTE = 10
HAPPY_SESSION_MINUTES = 25
MAX_PET_STAT = 10
NEW_PET_STAT = 5
SECONDS_PER_LEVEL = 24 * 60 * 60

DIFFICULTY_DECAY: dict[str, int] = {
    "easy": 1,
    "normal": 2,
    "hard": 3,
}


def level_for_seconds(total_seconds: int) -> int:
    """Tamo level for a lifetime focus total."""
    return max(0, total_seconds) // SECONDS_PER_LEVEL


class ProfileNotFoundError(LookupError):
    """Raised when the database has not been initialised."""


# ── manager ──────────────────────────────────────────────────────────────


class ProfileManager:
    """Reads and updates the single profile row."""

    def get_profile(self) -> Profile:
        with get_session() as db:
            return self._require(db)

    def create_profile(
        self,
        name: str,
        pet_name: str = "Tamo",
        difficulty: str = "normal",
        *,
        today: date | None = None,
    ) -> Profile:
        """Start over with a fresh profile under *name*.

        Everything owned or earned by the previous profile is deleted too.
        """
        if difficulty not in DIFFICULTY_DECAY:
            raise ValueError(f"unknown difficulty: {difficulty!r}")
        if not name.strip():
            raise ValueError("profile name must not be empty")
        today = today or date.today()

        with get_session() as db:
            for model in (
                Profile, FocusSession, DailyStats, InventoryItem,
                AchievementUnlock, PetHistory,
            ):
                db.query(model).delete()
            profile = Profile(
                name=name.strip(),
                pet_name=pet_name.strip() or "Tamo",
                difficulty=difficulty,
                join_date=today,
                last_active_date=today,
                pet_born=today,
                pet_happiness=NEW_PET_STAT,
                pet_hunger=NEW_PET_STAT,
            )
            db.add(profile)
            db.flush()
            logger.info("Created profile %s (%05d)", profile.name, profile.profile_code)
            return profile

    def set_difficulty(self, difficulty: str) -> None:
        if difficulty not in DIFFICULTY_DECAY:
            raise ValueError(f"unknown difficulty: {difficulty!r}")
        with get_session() as db:
            self._require(db).difficulty = difficulty

    # ── time-accumulation sink ───────────────────────────────────────

    def report(
        self,
        minutes: int,
        seconds: int,
        *,
        completed: bool = True,
        session_date: date | None = None,
    ) -> dict:
        """Credit a focus phase to the profile.

        Returns a dict with ``tokens_earned``, ``total_seconds``,
        ``old_level``, ``new_level``, ``level_up`` and ``pet_happiness``.
        """
        if minutes < 0 or seconds < 0:
            raise ValueError(
                f"focus time must not be negative: {minutes}m {seconds}s"
            )
        if session_date is None:
            session_date = date.today()
        focused = minutes * 60 + seconds
        tokens = (focused // 60) * TOKENS_PER_MINUTE

        with get_session() as db:
            profile = self._require(db)
            old_level = level_for_seconds(profile.total_seconds)

            profile.total_seconds += focused
            profile.tokens += tokens
            if focused >= HAPPY_SESSION_MINUTES * 60:
                profile.pet_happiness = min(
                    MAX_PET_STAT, profile.pet_happiness + 1,
                )

            daily = (
                db.query(DailyStats)
                .filter_by(date=session_date)
                .first()
            )
            if daily is None:
                daily = DailyStats(
                    date=session_date,
                    focus_seconds=0,
                    sessions_completed=0,
                    tokens_earned=0,
                )
                db.add(daily)
            daily.focus_seconds += focused
            daily.tokens_earned += tokens
            if completed:
                daily.sessions_completed += 1

            new_level = level_for_seconds(profile.total_seconds)
            if new_level > old_level:
                logger.info("%s reached level %d", profile.pet_name, new_level)
            logger.debug(
                "Reported %dm %ds (+%d tokens)", minutes, seconds, tokens,
            )

            return {
                "tokens_earned": tokens,
                "total_seconds": profile.total_seconds,
                "old_level": old_level,
                "new_level": new_level,
                "level_up": new_level > old_level,
                "pet_happiness": profile.pet_happiness,
            }

    # ── daily roll-over ──────────────────────────────────────────────

    def roll_over(self, today: date | None = None) -> dict:
        """Apply the days since the last activity to the Tamo.

        Returns ``{"days", "pet_hunger", "pet_happiness", "pet_left"}``.
        """
        today = today or date.today()
        with get_session() as db:
            profile = self._require(db)
            days = (today - profile.last_active_date).days
            if days <= 0:
                return {
                    "days": 0,
                    "pet_hunger": profile.pet_hunger,
                    "pet_happiness": profile.pet_happiness,
                    "pet_left": False,
                }

            decay = DIFFICULTY_DECAY.get(profile.difficulty, 2) * days
            profile.pet_hunger = max(0, profile.pet_hunger - decay)
            profile.pet_happiness = max(0, profile.pet_happiness - decay)
            profile.last_active_date = today

            pet_left = profile.pet_hunger == 0 and profile.pet_happiness == 0
            if pet_left:
                logger.warning(
                    "%s left after %d day(s) away", profile.pet_name, days,
                )
                db.add(PetHistory(
                    pet_name=profile.pet_name,
                    born=profile.pet_born,
                    left=today,
                    focus_seconds=profile.total_seconds - profile.pet_focus_start,
                ))
                profile.pet_born = today
                profile.pet_focus_start = profile.total_seconds
                profile.pet_hunger = NEW_PET_STAT
                profile.pet_happiness = NEW_PET_STAT

            return {
                "days": days,
                "pet_hunger": profile.pet_hunger,
                "pet_happiness": profile.pet_happiness,
                "pet_left": pet_left,
            }

    def pet_history(self) -> list[PetHistory]:
        with get_session() as db:
            return db.query(PetHistory).order_by(PetHistory.left).all()

    # ── internal ─────────────────────────────────────────────────────

    @staticmethod
    def _require(db) -> Profile:
        profile = db.query(Profile).first()
        if profile is None:
            raise ProfileNotFoundError("no profile; call init_db() first")
        return profile
