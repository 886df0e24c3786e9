import signal
from typing import Callable, Dict, List, Tuple

import pytest

from pmon.scheduler import Phase


class FakeClock:
    """Deterministic clock; ``at(t, fn)`` runs fn once the clock reaches t."""

    def __init__(self, start: float = 0.0):
        self.current = start
        self.sleeps: List[float] = []
        self._events: Dict[float, Callable[[], None]] = {}

    def at(self, when: float, action: Callable[[], None]) -> None:
        self._events[when] = action

    def now(self) -> float:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds
        action = self._events.pop(self.current, None)
        if action is not None:
            action()


class RecordingReporter:
    def __init__(self) -> None:
        self.reports: List[Tuple[Phase, int, int, bool]] = []
        self.closed = 0

    def report(self, phase: Phase, remaining_seconds: int, total_seconds: int, paused: bool) -> None:
        self.reports.append((phase, remaining_seconds, total_seconds, paused))

    def close(self) -> None:
        self.closed += 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def restore_signals():
    names = ("SIGINT", "SIGTERM", "SIGUSR1")
    saved = {
        getattr(signal, name): signal.getsignal(getattr(signal, name))
        for name in names
        if hasattr(signal, name)
    }
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)
