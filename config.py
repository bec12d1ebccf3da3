"""Configuration for the activity monitor. Defaults reproduce the stock behavior."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env (optional; real environment variables win)
_env_file = Path(__file__).parent / ".env"
load_dotenv(_env_file)

# Poll interval for activity monitoring (seconds)
POLL_INTERVAL = float(os.environ.get("ACTIVITY_POLL_INTERVAL", "5"))
# Window-title failures in a row before the long pause
MAX_CONSECUTIVE_ERRORS = int(os.environ.get("ACTIVITY_MAX_CONSECUTIVE_ERRORS", "3"))
# Long pause after too many failures (seconds)
ERROR_BACKOFF = float(os.environ.get("ACTIVITY_ERROR_BACKOFF", "10"))
# Per-command limit for xdotool calls; unset = no limit
_timeout = os.environ.get("ACTIVITY_QUERY_TIMEOUT", "").strip()
QUERY_TIMEOUT = float(_timeout) if _timeout else None

XDOTOOL_BIN = os.environ.get("XDOTOOL_BIN", "xdotool")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
