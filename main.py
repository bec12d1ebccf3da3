#!/usr/bin/env python3
"""
Activity Monitor - prints the focused window title and its process every few seconds (X11).

Usage:
  python main.py
  python main.py --interval 2 --log-level DEBUG
"""

import argparse
import logging
import signal
import sys

import config
from activity_tracker import (
    ActivityMonitor,
    DependencyError,
    StopFlag,
    XdotoolProcessQuery,
    XdotoolWindowQuery,
    check_dependencies,
)
from activity_tracker.linux import Xdotool

logger = logging.getLogger("activity_monitor")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S",
    )


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Log the focused window and process (X11, xdotool)")
    p.add_argument("--interval", type=float, default=config.POLL_INTERVAL, help="Seconds between polls")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=config.LOG_LEVEL,
        help="Diagnostics level (stderr)",
    )
    args = p.parse_args(argv)
    # choices are not checked against the default, which comes from LOG_LEVEL
    if args.log_level not in LOG_LEVELS:
        p.error(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {args.log_level!r}")
    return args


def main(argv=None, stop_event: StopFlag | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    logger.info("Starting activity monitor...")

    xdotool = Xdotool(binary=config.XDOTOOL_BIN, timeout=config.QUERY_TIMEOUT)
    try:
        check_dependencies(xdotool)
    except DependencyError as e:
        logger.critical("Dependency check failed: %s", e)
        return 1

    monitor = ActivityMonitor(
        window_query=XdotoolWindowQuery(xdotool),
        process_query=XdotoolProcessQuery(xdotool),
        poll_interval=args.interval,
        max_consecutive_errors=config.MAX_CONSECUTIVE_ERRORS,
        error_backoff=config.ERROR_BACKOFF,
    )

    stop_event = stop_event or StopFlag()

    def stop(_=None, __=None):
        stop_event.set()

    signal.signal(signal.SIGINT, stop)
    signal.signal(signal.SIGTERM, stop)

    print("All dependencies checked. Starting monitoring...")
    print("Press Ctrl+C to stop")
    monitor.run(stop_event)
    print("\nStopped.")
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
