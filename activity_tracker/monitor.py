"""Activity monitor - polls the focused window and process name, with error backoff."""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from .errors import QueryError

logger = logging.getLogger(__name__)

POLL_INTERVAL = 5.0
MAX_CONSECUTIVE_ERRORS = 3
ERROR_BACKOFF = 10.0

# Checked in order, first substring found in the lower-cased process name wins
ACTIVITY_CATEGORIES: list[tuple[str, str]] = [
    ("chrome", "Browser activity detected"),
    ("code", "VS Code activity detected"),
    ("nvim", "Neovim activity detected"),
]

BACKOFF_HINTS = [
    "No X11 session active",
    "Running in Wayland instead of X11",
    "No active window",
    "Insufficient permissions",
]


@dataclass
class Sample:
    """What the user was looking at on one tick."""
    window_title: str
    process_name: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class MonitorState:
    consecutive_errors: int = 0


class StopFlag:
    """
    Stop request for ActivityMonitor.run. Setting it is a plain assignment, so it is
    safe from a signal handler; wait() sleeps in short slices and checks the flag.
    """

    def __init__(self, check_every: float = 0.2):
        self.check_every = check_every
        self._stopped = False

    def set(self) -> None:
        self._stopped = True

    def is_set(self) -> bool:
        return self._stopped

    def wait(self, timeout: float) -> bool:
        """Sleep up to timeout seconds. Returns True if stopped."""
        deadline = time.monotonic() + timeout
        while not self._stopped:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            time.sleep(min(self.check_every, remaining))
        return self._stopped


class TickResult(Enum):
    """How a single poll ended."""
    REPORTED = "reported"
    WINDOW_FAILED = "window_failed"
    BACKOFF = "backoff"
    PROCESS_FAILED = "process_failed"


def classify_process(process_name: str) -> Optional[str]:
    """Activity tag for a process name, or None. Plain substring match, so "codecov" counts as code."""
    name = process_name.lower()
    for needle, tag in ACTIVITY_CATEGORIES:
        if needle in name:
            return tag
    return None


def report(sample: Sample, out: Callable[[str], None] = print) -> None:
    out(
        f"[{sample.timestamp.strftime('%H:%M:%S')}] "
        f"Process: {sample.process_name} | Window: {sample.window_title}"
    )
    tag = classify_process(sample.process_name)
    if tag:
        out(f"→ {tag}")


class ActivityMonitor:
    """
    Polls the focused window title and owning process once per interval and reports them.

    Only window-title failures count toward max_consecutive_errors. Once the count
    reaches the limit the monitor waits error_backoff (instead of interval) and
    starts counting again from zero.
    """

    def __init__(
        self,
        window_query: Callable[[], str],
        process_query: Callable[[], str],
        poll_interval: float = POLL_INTERVAL,
        max_consecutive_errors: int = MAX_CONSECUTIVE_ERRORS,
        error_backoff: float = ERROR_BACKOFF,
        reporter: Callable[[Sample], None] = report,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.window_query = window_query
        self.process_query = process_query
        self.poll_interval = poll_interval
        self.max_consecutive_errors = max_consecutive_errors
        self.error_backoff = error_backoff
        self.reporter = reporter
        self.clock = clock
        self.state = MonitorState()

    def tick(self) -> tuple[TickResult, float]:
        """Run one poll. Returns the outcome and how many seconds to wait before the next one."""
        try:
            window_title = self.window_query()
        except QueryError as e:
            return self._on_window_error(e)
        self.state.consecutive_errors = 0

        try:
            process_name = self.process_query()
        except QueryError as e:
            logger.warning("Error getting process name: %s", e)
            return TickResult.PROCESS_FAILED, self.poll_interval

        sample = Sample(
            window_title=window_title,
            process_name=process_name.strip(),
            timestamp=self.clock(),
        )
        self.reporter(sample)
        return TickResult.REPORTED, self.poll_interval

    def _on_window_error(self, error: QueryError) -> tuple[TickResult, float]:
        self.state.consecutive_errors += 1
        logger.warning(
            "Error getting window title (attempt %d/%d): %s",
            self.state.consecutive_errors,
            self.max_consecutive_errors,
            error,
        )
        if self.state.consecutive_errors < self.max_consecutive_errors:
            return TickResult.WINDOW_FAILED, self.poll_interval

        logger.warning("Too many consecutive errors. Possible causes:")
        for i, hint in enumerate(BACKOFF_HINTS, 1):
            logger.warning("%d. %s", i, hint)
        logger.warning("Trying again in %g seconds...", self.error_backoff)
        self.state.consecutive_errors = 0
        return TickResult.BACKOFF, self.error_backoff

    def run(self, stop_event: Optional[StopFlag] = None) -> None:
        """
        Poll until stop_event is set. Without one, runs until the process is killed.
        Anything with is_set() and wait(timeout) works as stop_event.
        """
        stop_event = stop_event or StopFlag()
        while not stop_event.is_set():
            _, delay = self.tick()
            if stop_event.wait(delay):
                break
