"""Pause and shutdown flags set from signal handlers."""
from __future__ import annotations

import logging
import signal

logger = logging.getLogger(__name__)


class Controls:
    """Flags polled by the timer loop at every tick.

    Signal handlers only flip these attributes. Reading and writing a plain
    attribute is atomic, and Python runs handlers on the main thread between
    bytecodes, so the loop never observes a half-applied change.
    """

    def __init__(self) -> None:
        self.paused = False
        self.stop_requested = False

    def toggle_pause(self) -> None:
        self.paused = not self.paused

    def request_stop(self) -> None:
        self.stop_requested = True

    def install(self) -> None:
        def stop_handler(signum: int, frame) -> None:
            self.request_stop()

        def pause_handler(signum: int, frame) -> None:
            self.toggle_pause()

        signal.signal(signal.SIGINT, stop_handler)
        signal.signal(signal.SIGTERM, stop_handler)
        # SIGUSR1 does not exist on Windows
        pause_signal = getattr(signal, "SIGUSR1", None)
        if pause_signal is not None:
            signal.signal(pause_signal, pause_handler)
        logger.debug("Signal handlers installed (pause signal: %s)", pause_signal)
