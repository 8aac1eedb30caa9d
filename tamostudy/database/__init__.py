"""Database package."""

from .db import get_session, init_db, configure_engine
from .models import (
    Profile, FocusSession, DailyStats, InventoryItem, AchievementUnlock,
    PetHistory,
)

__all__ = [
    "get_session",
    "init_db",
    "configure_engine",
    "Profile",
    "FocusSession",
    "DailyStats",
    "InventoryItem",
    "AchievementUnlock",
    "PetHistory",
]
