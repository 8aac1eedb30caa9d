"""Audio package."""

from .sounds import SoundManager, ALARM_NAMES

__all__ = ["SoundManager", "ALARM_NAMES"]
