"""Linux-specific activity detection using xdotool (X11)."""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional

import psutil

from .errors import DependencyError, ProcessQueryError, WindowQueryError

logger = logging.getLogger(__name__)

XDOTOOL = "xdotool"


def _describe(exc: BaseException) -> str:
    """Short cause for a failed command, including its stderr when there is one."""
    if isinstance(exc, subprocess.CalledProcessError):
        stderr = (exc.stderr or "").strip()
        if stderr:
            return f"exit status {exc.returncode}: {stderr}"
        return f"exit status {exc.returncode}"
    return str(exc)


@dataclass
class Xdotool:
    """Thin wrapper around the xdotool binary. Every call blocks until xdotool exits."""

    binary: str = XDOTOOL
    timeout: Optional[float] = None  # None = wait forever

    def call(self, *args: str) -> str:
        cmd = [self.binary, *args]
        logger.debug("exec: %s", " ".join(cmd))
        result = subprocess.run(
            cmd,
            capture_output=True,
            encoding="utf-8",
            errors="replace",  # legacy WM_NAME titles are often Latin-1
            timeout=self.timeout,
            check=True,
        )
        return result.stdout.strip()

    def get_active_window(self) -> str:
        window_id = self.call("getactivewindow")
        if not window_id:
            raise ValueError("xdotool returned no window id")
        return window_id

    def get_window_name(self, window_id: str) -> str:
        return self.call("getwindowname", window_id)

    def get_window_pid(self, window_id: str) -> int:
        return int(self.call("getwindowpid", window_id))

    def get_display_geometry(self) -> str:
        return self.call("getdisplaygeometry")


# Anything a subprocess call can throw at us
_COMMAND_ERRORS = (subprocess.SubprocessError, OSError, ValueError)


class XdotoolWindowQuery:
    """Returns the title of the focused window."""

    def __init__(self, xdotool: Optional[Xdotool] = None):
        self.xdotool = xdotool or Xdotool()

    def __call__(self) -> str:
        try:
            window_id = self.xdotool.get_active_window()
        except _COMMAND_ERRORS as e:
            raise WindowQueryError(f"failed to get active window ID: {_describe(e)}") from e

        try:
            return self.xdotool.get_window_name(window_id)
        except _COMMAND_ERRORS as e:
            raise WindowQueryError(f"failed to get window name: {_describe(e)}") from e


class XdotoolProcessQuery:
    """
    Returns the name of the process that owns the focused window.
    Window -> PID goes through xdotool, PID -> name through the process table.
    """

    def __init__(self, xdotool: Optional[Xdotool] = None):
        self.xdotool = xdotool or Xdotool()

    def __call__(self) -> str:
        try:
            window_id = self.xdotool.get_active_window()
        except _COMMAND_ERRORS as e:
            raise ProcessQueryError(f"failed to get active window ID: {_describe(e)}") from e

        try:
            pid = self.xdotool.get_window_pid(window_id)
        except _COMMAND_ERRORS as e:
            raise ProcessQueryError(f"failed to get window PID: {_describe(e)}") from e

        try:
            name = psutil.Process(pid).name()
        except (psutil.Error, ValueError) as e:
            raise ProcessQueryError(f"failed to get process name: {e}") from e
        return name.strip()


def check_dependencies(xdotool: Optional[Xdotool] = None) -> None:
    """
    Verify xdotool is installed and can talk to an X display.
    Raises DependencyError; the monitor must not start if this fails.
    """
    xdotool = xdotool or Xdotool()

    if shutil.which(xdotool.binary) is None:
        raise DependencyError(
            f"{xdotool.binary} is not installed. Please run: sudo apt-get install xdotool"
        )

    try:
        geometry = xdotool.get_display_geometry()
    except _COMMAND_ERRORS as e:
        raise DependencyError(
            f"cannot connect to X display. Make sure you're running in X11 session: {_describe(e)}"
        ) from e
    logger.debug("display geometry: %s", geometry)
