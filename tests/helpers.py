"""Shared test helpers for TamoStudy."""

from tamostudy.timer.session import TickEvent, TimerSession


class SignalCollector:
    """Utility to capture pyqtSignal emissions (or listener calls) into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeSoundManager:
    """Records alarm names instead of playing them."""

    def __init__(self, fail: bool = False):
        self.played: list[str] = []
        self.fail = fail

    def play(self, name: str) -> None:
        if self.fail:
            raise RuntimeError("audio device unavailable")
        self.played.append(name)


def run_until_done(session: TimerSession, limit: int = 100_000) -> list[TickEvent]:
    """Tick until the session is complete; return every non-CONTINUE event."""
    events: list[TickEvent] = []
    for _ in range(limit):
        event = session.tick()
        if event is not TickEvent.CONTINUE:
            events.append(event)
        if event is TickEvent.ALL_SESSIONS_COMPLETE:
            return events
    raise AssertionError("session never completed")
