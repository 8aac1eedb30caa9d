"""Application settings with JSON persistence.

Settings are stored at:
    ~/.tamostudy/settings.json

Usage::

    settings = load_settings()
    settings.alarm_sound = "bell"
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields

from .database.db import APP_DIR
from .timer.session import Mode, TimerConfig

logger = logging.getLogger(__name__)

SETTINGS_PATH = APP_DIR / "settings.json"

ALARM_SOUNDS = ("none", "soft", "traditional", "pac", "calm", "bell")


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── focus timer ───────────────────────────────────────────────────
    focus_mode: str = Mode.POMODORO.value   # custom | interval_5 | pomodoro
    custom_minutes: int = 25
    custom_seconds: int = 0
    interval_minutes: int = 25
    pomodoro_session_minutes: int = 25
    pomodoro_break_minutes: int = 5
    pomodoro_sessions: int = 4

    # ── pet ───────────────────────────────────────────────────────────
    difficulty: str = "normal"              # easy | normal | hard

    # ── audio ─────────────────────────────────────────────────────────
    alarm_sound: str = "soft"
    sound_volume: int = 70                  # 0-100

    # ── notifications ─────────────────────────────────────────────────
    achievement_notifications: bool = True

    def timer_config(self) -> tuple[Mode, TimerConfig]:
        """The ``(mode, config)`` pair to start a focus run with."""
        mode = Mode(self.focus_mode)
        if mode is Mode.CUSTOM:
            config = TimerConfig.custom(self.custom_minutes, self.custom_seconds)
        elif mode is Mode.INTERVAL_5:
            config = TimerConfig.interval(self.interval_minutes)
        else:
            config = TimerConfig.pomodoro(
                self.pomodoro_session_minutes,
                self.pomodoro_break_minutes,
                self.pomodoro_sessions,
            )
        return mode, config


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("Could not read %s, using defaults", SETTINGS_PATH, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
