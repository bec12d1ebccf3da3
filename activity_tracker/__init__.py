"""Activity tracking - samples the focused window title and owning process."""

from .errors import (
    ActivityTrackerError,
    DependencyError,
    ProcessQueryError,
    QueryError,
    WindowQueryError,
)
from .linux import XdotoolProcessQuery, XdotoolWindowQuery, check_dependencies
from .monitor import ActivityMonitor, MonitorState, Sample, StopFlag, TickResult, classify_process, report

__all__ = [
    "ActivityMonitor",
    "ActivityTrackerError",
    "DependencyError",
    "MonitorState",
    "ProcessQueryError",
    "QueryError",
    "Sample",
    "StopFlag",
    "TickResult",
    "WindowQueryError",
    "XdotoolProcessQuery",
    "XdotoolWindowQuery",
    "check_dependencies",
    "classify_process",
    "report",
]
