"""Command line interface for pmon."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable

from . import scheduler
from .controls import Controls
from .reporter import FileReporter, Reporter, TerminalReporter
from .timer import run_session

EXIT_STARTUP_FAILURE = 1
PREVIEW_LENGTH = 10

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pmon",
        description="Cycle between work sessions and breaks, printing a countdown.",
        epilog="Send SIGUSR1 to pause or resume, SIGINT or SIGTERM to stop and print totals.",
    )
    parser.add_argument("-c", "--cycles", type=positive_int, default=scheduler.DEFAULTS["cycles"], help="number of work sessions before a long break (default %(default)s)")
    parser.add_argument("-w", "--work-minutes", type=positive_int, default=scheduler.DEFAULTS["work_minutes"], help="minutes per work session (default %(default)s)")
    parser.add_argument("-s", "--short-break-minutes", type=positive_int, default=scheduler.DEFAULTS["short_break_minutes"], help="minutes per short break (default %(default)s)")
    parser.add_argument("-l", "--long-break-minutes", type=positive_int, default=scheduler.DEFAULTS["long_break_minutes"], help="minutes per long break (default %(default)s)")
    parser.add_argument("-o", "--output", metavar="PATH", help="path to print timer output to instead of the terminal")
    parser.add_argument("--fast", action="store_true", help="treat one real second as one minute (handy for demos)")
    parser.add_argument("--dry-run", action="store_true", help="show the upcoming phases without running timers")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level for stderr (default %(default)s)")
    return parser.parse_args(list(argv))


def setup_logging(level: int = logging.WARNING) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_config(args: argparse.Namespace) -> scheduler.Config:
    return scheduler.Config.from_minutes(
        cycles=args.cycles,
        work_minutes=args.work_minutes,
        short_break_minutes=args.short_break_minutes,
        long_break_minutes=args.long_break_minutes,
        output_path=args.output,
        second_length=1 if args.fast else scheduler.SECONDS_IN_MINUTE,
    )


def open_reporter(config: scheduler.Config) -> Reporter:
    if config.output_path:
        return FileReporter.open(config.output_path, config.minute_length)
    return TerminalReporter(minute_length=config.minute_length)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(getattr(logging, args.log_level))
    config = build_config(args)

    controls = Controls()
    if not args.dry_run:
        # stop requests before the loop starts are honoured by its first tick
        controls.install()

    print("Cycles    :", args.cycles)
    print("Work      :", args.work_minutes, "minute(s)")
    print("Short br. :", args.short_break_minutes, "minute(s)")
    print("Long br.  :", args.long_break_minutes, "minute(s)")
    print()

    if args.dry_run:
        print("Planned phases:")
        for phase in scheduler.preview(config, PREVIEW_LENGTH):
            minutes = scheduler.phase_duration(config, phase) // config.minute_length
            print(f"- {phase.value}: {minutes} minute(s)")
        return 0

    try:
        reporter = open_reporter(config)
    except OSError as error:
        print(f"pmon: cannot open {config.output_path}: {error.strerror or error}", file=sys.stderr)
        return EXIT_STARTUP_FAILURE

    logger.info("Session starting: %s", config)
    run_session(config, scheduler.SessionState(), reporter, controls)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
