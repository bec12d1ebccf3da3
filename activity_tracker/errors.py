"""Errors raised by the window/process queries and the startup check."""


class ActivityTrackerError(Exception):
    """Base class for activity tracker failures."""


class DependencyError(ActivityTrackerError):
    """Required tool missing or no usable X11 session. Fatal at startup."""


class QueryError(ActivityTrackerError):
    """A single lookup failed this tick. The monitor logs it and keeps polling."""


class WindowQueryError(QueryError):
    pass


class ProcessQueryError(QueryError):
    pass
