"""Progress sinks for the timer loop: an in-place terminal line or a status file."""
from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO

from .scheduler import SECONDS_IN_MINUTE, Phase

logger = logging.getLogger(__name__)

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def format_clock(seconds: int) -> str:
    minutes, remainder = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{remainder:02d}"


def render_status(
    phase: Phase,
    remaining_seconds: int,
    total_seconds: int,
    paused: bool = False,
    minute_length: int = SECONDS_IN_MINUTE,
) -> str:
    """Render one status line, e.g. ``Work: [24:59/25]``.

    The part after the slash is the phase length in configured minutes,
    which are shorter than 60 seconds in demo mode.
    """
    name = f"{phase.value} (PAUSED)" if paused else phase.value
    total_minutes = total_seconds // minute_length
    return f"{name}: [{format_clock(remaining_seconds)}/{total_minutes}]"


class Reporter(Protocol):
    def report(self, phase: Phase, remaining_seconds: int, total_seconds: int, paused: bool) -> None:
        ...

    def close(self) -> None:
        ...


class TerminalReporter:
    """Redraws a single terminal line in place and hides the cursor while running."""

    def __init__(self, stream: TextIO | None = None, minute_length: int = SECONDS_IN_MINUTE):
        self._stream = stream or sys.stdout
        self._minute_length = minute_length
        self._cursor_hidden = False
        self._last_width = 0

    def report(self, phase: Phase, remaining_seconds: int, total_seconds: int, paused: bool) -> None:
        line = render_status(phase, remaining_seconds, total_seconds, paused, self._minute_length)
        # pad over whatever is left of a longer previous line
        padding = " " * max(self._last_width - len(line), 0)
        self._last_width = len(line)
        if not self._cursor_hidden:
            self._stream.write(HIDE_CURSOR)
            self._cursor_hidden = True
        self._stream.write(f"\r{line}{padding}")
        self._stream.flush()

    def close(self) -> None:
        if not self._cursor_hidden:
            return
        self._stream.write(SHOW_CURSOR + "\n")
        self._stream.flush()
        self._cursor_hidden = False


class FileReporter:
    """Keeps exactly one rendering in a file that a status bar can poll."""

    def __init__(self, handle: TextIO, minute_length: int = SECONDS_IN_MINUTE):
        self._handle = handle
        self._minute_length = minute_length

    @classmethod
    def open(cls, path: str, minute_length: int = SECONDS_IN_MINUTE) -> FileReporter:
        handle = open(path, "w", encoding="utf-8")
        logger.debug("Writing status to %s", path)
        return cls(handle, minute_length)

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def report(self, phase: Phase, remaining_seconds: int, total_seconds: int, paused: bool) -> None:
        self._handle.seek(0)
        line = render_status(phase, remaining_seconds, total_seconds, paused, self._minute_length)
        self._handle.write(line + "\n")
        self._handle.truncate()
        self._handle.flush()

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()
