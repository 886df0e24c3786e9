"""Pomodoro phase scheduling."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import List

logger = logging.getLogger(__name__)

SECONDS_IN_MINUTE = 60

DEFAULTS = {
    "cycles": 4,
    "work_minutes": 25,
    "short_break_minutes": 5,
    "long_break_minutes": 30,
}


class Phase(enum.Enum):
    WORK = "Work"
    SHORT_BREAK = "Short Break"
    LONG_BREAK = "Long Break"

    @property
    def is_break(self) -> bool:
        return self is not Phase.WORK


@dataclass(frozen=True)
class Config:
    """Durations and cycle length for a session, fixed once the timer starts."""

    cycles: int = DEFAULTS["cycles"]
    work_seconds: int = DEFAULTS["work_minutes"] * SECONDS_IN_MINUTE
    short_break_seconds: int = DEFAULTS["short_break_minutes"] * SECONDS_IN_MINUTE
    long_break_seconds: int = DEFAULTS["long_break_minutes"] * SECONDS_IN_MINUTE
    output_path: str | None = None
    minute_length: int = SECONDS_IN_MINUTE

    def __post_init__(self) -> None:
        if self.cycles < 1:
            raise ValueError("cycles must be at least 1")
        if min(self.work_seconds, self.short_break_seconds, self.long_break_seconds) <= 0:
            raise ValueError("all durations must be positive")
        if self.minute_length < 1:
            raise ValueError("minute_length must be positive")

    @classmethod
    def from_minutes(
        cls,
        *,
        cycles: int = DEFAULTS["cycles"],
        work_minutes: int = DEFAULTS["work_minutes"],
        short_break_minutes: int = DEFAULTS["short_break_minutes"],
        long_break_minutes: int = DEFAULTS["long_break_minutes"],
        output_path: str | None = None,
        second_length: int = SECONDS_IN_MINUTE,
    ) -> Config:
        """Build a config from minute values.

        Args:
            cycles: Work sessions before a long break.
            work_minutes: Length of each work session.
            short_break_minutes: Length of breaks between work sessions.
            long_break_minutes: Length of the break after every ``cycles`` sessions.
            output_path: File to write the status line to, or None for the terminal.
            second_length: Real seconds per configured minute; 1 for demos.
        """
        return cls(
            cycles=cycles,
            work_seconds=work_minutes * second_length,
            short_break_seconds=short_break_minutes * second_length,
            long_break_seconds=long_break_minutes * second_length,
            output_path=output_path,
            minute_length=second_length,
        )


@dataclass
class SessionState:
    """Mutable bookkeeping for the running session."""

    phase: Phase = Phase.WORK
    cycle_count: int = 0
    worked_seconds: int = 0
    break_seconds: int = 0
    elapsed_seconds: int = 0
    paused: bool = False


def phase_duration(config: Config, phase: Phase) -> int:
    if phase is Phase.WORK:
        return config.work_seconds
    if phase is Phase.LONG_BREAK:
        return config.long_break_seconds
    return config.short_break_seconds


def next_phase(state: SessionState, config: Config) -> Phase:
    """Return the phase that follows ``state.phase``.

    Completing a work phase counts a cycle; once ``config.cycles`` have been
    counted the long break is due and the count starts over at zero.
    """
    if state.phase is Phase.WORK:
        state.cycle_count += 1
        if state.cycle_count >= config.cycles:
            state.cycle_count = 0
            return Phase.LONG_BREAK
        return Phase.SHORT_BREAK

    if state.phase is Phase.LONG_BREAK:
        state.cycle_count = 0

    return Phase.WORK


def advance(state: SessionState, config: Config) -> Phase:
    previous = state.phase
    state.phase = next_phase(state, config)
    state.elapsed_seconds = 0
    logger.info(
        "Phase change: %s -> %s (cycle %d/%d)",
        previous.value,
        state.phase.value,
        state.cycle_count,
        config.cycles,
    )
    return state.phase


def preview(config: Config, count: int, state: SessionState | None = None) -> List[Phase]:
    """List the next ``count`` phases, starting with the current one."""
    if count < 0:
        raise ValueError("count must not be negative")

    scratch = replace(state) if state is not None else SessionState()
    phases: List[Phase] = []
    for _ in range(count):
        phases.append(scratch.phase)
        scratch.phase = next_phase(scratch, config)
    return phases
