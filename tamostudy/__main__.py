"""Allow running TamoStudy as a module: python -m tamostudy.

Runs one focus run from the saved settings without a window and quits
when every session is done.  Ctrl+C breaks focus early; the time spent so
far is still credited.
"""

import logging
import signal
import sys

from PyQt6.QtCore import QCoreApplication, QTimer

from .audio.sounds import SoundManager
from .database.db import init_db
from .gamification.stats import format_focus_time, load_stats
from .logging_setup import setup_logging
from .profile import ProfileManager
from .settings import load_settings
from .timer.engine import FocusTimer

logger = logging.getLogger("tamostudy")


def _announce_achievements(unlocked: list) -> None:
    for achievement in unlocked:
        logger.info("New achievement: %s", achievement.name)


def main() -> None:
    setup_logging()
    init_db()
    settings = load_settings()

    profiles = ProfileManager()
    profiles.set_difficulty(settings.difficulty)
    day = profiles.roll_over()
    if day["pet_left"]:
        logger.info("Your Tamo ran away. A new egg has hatched.")

    app = QCoreApplication(sys.argv)
    app.setApplicationName("TamoStudy")

    sounds = SoundManager(parent=app)
    sounds.set_volume(settings.sound_volume)

    timer = FocusTimer(
        parent=app, profile_manager=profiles, sound_manager=sounds,
        alarm=settings.alarm_sound,
    )
    timer.tick.connect(lambda mm, ss: print(f"\r{mm}:{ss}", end="", flush=True))
    timer.phase_changed.connect(
        lambda change: logger.info(
            "%s (%d/%d)", change.phase.value, change.session_index,
            change.total_sessions,
        )
    )
    if settings.achievement_notifications:
        timer.achievements_unlocked.connect(_announce_achievements)
    timer.session_finished.connect(lambda _data: app.quit())

    # Let Ctrl+C reach Python between Qt events
    signal.signal(signal.SIGINT, lambda *_: timer.break_now())
    heartbeat = QTimer(app)
    heartbeat.timeout.connect(lambda: None)
    heartbeat.start(250)

    mode, config = settings.timer_config()
    timer.start(mode, config)
    app.exec()

    stats = load_stats()
    print()
    logger.info(
        "Total focus %s, %d tokens, %s level %d",
        format_focus_time(stats.total_seconds), stats.tokens,
        stats.pet_name, stats.pet_level,
    )
    sys.exit(0)


if __name__ == "__main__":
    main()
