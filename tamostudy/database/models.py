"""SQLAlchemy ORM models for TamoStudy."""

import random
from datetime import datetime, date
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Date
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _random_profile_code() -> int:
    return random.randrange(100_000)


class Profile(Base):
    """Single-row table: the user, their totals, and their Tamo."""

    __tablename__ = "profile"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, default="Student")
    profile_code = Column(Integer, nullable=False, default=_random_profile_code)  # 5 digits
    join_date = Column(Date, nullable=False, default=date.today)
    last_active_date = Column(Date, nullable=False, default=date.today)
    total_seconds = Column(Integer, nullable=False, default=0)
    tokens = Column(Integer, nullable=False, default=0)
    difficulty = Column(String(10), nullable=False, default="normal")  # easy | normal | hard
    background_key = Column(String(32), nullable=False, default="default")
    border_key = Column(String(32), nullable=False, default="default")

    # ── the Tamo ──────────────────────────────────────────────────────
    pet_name = Column(String(64), nullable=False, default="Tamo")
    pet_happiness = Column(Integer, nullable=False, default=5)  # 0-10
    pet_hunger = Column(Integer, nullable=False, default=5)     # 0-10, 10 = full
    pet_born = Column(Date, nullable=False, default=date.today)
    pet_focus_start = Column(Integer, nullable=False, default=0)  # total_seconds at hatch

    def __repr__(self) -> str:
        return (
            f"<Profile name={self.name} seconds={self.total_seconds} "
            f"tokens={self.tokens}>"
        )


class FocusSession(Base):
    """One focus phase, completed or broken off early."""

    __tablename__ = "focus_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start_time = Column(DateTime, nullable=False, default=datetime.now)
    end_time = Column(DateTime, nullable=True)
    duration_seconds = Column(Integer, nullable=False, default=0)
    mode = Column(String(20), nullable=False, default="custom")  # custom | interval_5 | pomodoro
    session_index = Column(Integer, nullable=False, default=1)
    completed = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<FocusSession id={self.id} mode={self.mode} "
            f"completed={self.completed}>"
        )


class DailyStats(Base):
    """Aggregated per-day focus totals."""

    __tablename__ = "daily_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)
    focus_seconds = Column(Integer, nullable=False, default=0)
    sessions_completed = Column(Integer, nullable=False, default=0)
    tokens_earned = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<DailyStats date={self.date} focus={self.focus_seconds}s "
            f"sessions={self.sessions_completed}>"
        )


class InventoryItem(Base):
    """Owned shop items.  Cosmetics always have quantity 1."""

    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_type = Column(String(20), nullable=False)   # food | background | border
    item_key = Column(String(32), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    acquired_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<InventoryItem type={self.item_type} key={self.item_key} "
            f"qty={self.quantity}>"
        )


class AchievementUnlock(Base):
    """Achievements the user has earned."""

    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(64), nullable=False, unique=True)
    unlocked_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return f"<AchievementUnlock key={self.key}>"


class PetHistory(Base):
    """Tamos that left after being neglected.

    ``focus_seconds`` is the focus time earned while that Tamo was around.
    """

    __tablename__ = "pet_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pet_name = Column(String(64), nullable=False)
    born = Column(Date, nullable=False)
    left = Column(Date, nullable=False)
    focus_seconds = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<PetHistory name={self.pet_name} left={self.left}>"
