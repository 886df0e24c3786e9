"""Closing summary of time spent working and on break."""
from __future__ import annotations

from typing import List, Tuple

from .scheduler import SessionState


def totals(state: SessionState) -> Tuple[int, int]:
    """Return ``(worked, on_break)`` seconds, counting the phase in progress."""
    worked = state.worked_seconds
    on_break = state.break_seconds
    if state.phase.is_break:
        on_break += state.elapsed_seconds
    else:
        worked += state.elapsed_seconds
    return worked, on_break


def format_duration(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours} hrs {minutes} mins {secs} secs"


def render_summary(state: SessionState) -> List[str]:
    worked, on_break = totals(state)
    return [
        f"Time Studying: {format_duration(worked)}",
        f"Time On Break: {format_duration(on_break)}",
    ]
