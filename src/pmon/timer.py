"""Tick-based countdown that drives phases and accumulates their time."""
from __future__ import annotations

import logging
import math
import sys
import time
from typing import TextIO

from . import scheduler, summary
from .controls import Controls
from .reporter import Reporter
from .scheduler import Config, SessionState

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


class Clock:
    """Monotonic time source and sleep, swappable in tests."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


def _remaining_whole_seconds(expiry: float, now: float, duration: int) -> int:
    remaining = int(math.ceil(expiry - now))
    return max(0, min(duration, remaining))


def run_phase(
    config: Config,
    state: SessionState,
    reporter: Reporter,
    controls: Controls,
    clock: Clock | None = None,
) -> bool:
    """Count down ``state.phase`` and fold its length into the session totals.

    Reported values can lag wall-clock time by up to one tick. Time spent
    paused pushes the expiry back by the same amount, so a paused phase still
    runs for its full configured length.

    Returns False when a stop was requested before the phase expired, in which
    case ``state.elapsed_seconds`` holds the partial progress and nothing is
    added to the totals.
    """
    clock = clock or Clock()
    phase = state.phase
    duration = scheduler.phase_duration(config, phase)
    expiry = clock.now() + duration
    paused_since: float | None = None
    state.elapsed_seconds = 0
    logger.info("%s started: %ss", phase.value, duration)

    while True:
        now = clock.now()
        if controls.paused:
            if paused_since is None:
                paused_since = now
                logger.info("%s paused", phase.value)
        elif paused_since is not None:
            expiry += now - paused_since
            paused_since = None
            logger.info("%s resumed", phase.value)
        state.paused = paused_since is not None

        # remaining time is frozen at the instant the pause was noticed
        counted_now = paused_since if paused_since is not None else now
        remaining = _remaining_whole_seconds(expiry, counted_now, duration)
        state.elapsed_seconds = duration - remaining

        if controls.stop_requested:
            logger.info("%s stopped with %ss left", phase.value, remaining)
            return False
        if remaining <= 0:
            break

        reporter.report(phase, remaining, duration, state.paused)
        clock.sleep(TICK_SECONDS)

    if phase.is_break:
        state.break_seconds += duration
    else:
        state.worked_seconds += duration
    state.elapsed_seconds = 0
    state.paused = False
    logger.info("%s completed", phase.value)
    return True


def run_session(
    config: Config,
    state: SessionState,
    reporter: Reporter,
    controls: Controls,
    clock: Clock | None = None,
    out: TextIO | None = None,
) -> None:
    """Cycle through phases until a stop is requested, then print the summary.

    The summary is written exactly once, on every way out of the loop.
    """
    out = out or sys.stdout
    try:
        while run_phase(config, state, reporter, controls, clock):
            scheduler.advance(state, config)
    finally:
        reporter.close()
        out.write("\n" + "\n".join(summary.render_summary(state)) + "\n")
        out.flush()
