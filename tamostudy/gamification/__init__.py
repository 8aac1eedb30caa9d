"""Gamification package."""

from .achievements import (
    AchievementManager,
    AchievementDef,
    ACHIEVEMENTS,
    get_achievement,
    longest_streak,
)
from .shop import (
    Shop,
    ShopItem,
    Inventory,
    CATALOG,
    FOODS,
    BACKGROUNDS,
    BORDERS,
    ShopError,
    UnknownItemError,
    InsufficientTokensError,
    AlreadyOwnedError,
    InventoryFullError,
    NotInInventoryError,
)
from .stats import Stats, load_stats, format_focus_time

__all__ = [
    "AchievementManager",
    "AchievementDef",
    "ACHIEVEMENTS",
    "get_achievement",
    "longest_streak",
    "Shop",
    "ShopItem",
    "Inventory",
    "CATALOG",
    "FOODS",
    "BACKGROUNDS",
    "BORDERS",
    "ShopError",
    "UnknownItemError",
    "InsufficientTokensError",
    "AlreadyOwnedError",
    "InventoryFullError",
    "NotInInventoryError",
    "Stats",
    "load_stats",
    "format_focus_time",
]
