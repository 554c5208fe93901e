# realm_config/logger.py
import os
import sys
from datetime import datetime

from realm_config.errors import FileIOError

LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40, "FAIL": 40}
_STDERR_LEVELS = {"ERROR", "FAIL"}
LOG_PHASE = "log"

_min_level = "INFO"


def set_level(level):
    """Suppress entries below `level` (e.g. "WARN" for --quiet). Unknown names raise KeyError."""
    global _min_level
    if level not in LEVELS:
        raise KeyError(f"unknown log level: {level}")
    _min_level = level


def log(msg, level="INFO"):
    """
    Write a timestamped log entry to stdout (stderr for ERROR/FAIL).

    Args:
        msg (str): The log message text.
        level (str, optional): Log level label (e.g., "INFO", "ERROR"). Defaults to "INFO".

    Side effects:
        - Prints to stdout or stderr.
        - When REALM_CONFIG_LOG is set, creates its parent directory if missing
          and appends the entry to that file.

    Raises:
        FileIOError: (phase "log") if the REALM_CONFIG_LOG directory or file
        cannot be created or written. The console line is printed first.
    """
    if LEVELS.get(level, 20) < LEVELS[_min_level]:
        return
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    entry = f"[{level} {timestamp}] {msg}"
    print(entry, file=sys.stderr if level in _STDERR_LEVELS else sys.stdout)

    log_file = os.getenv("REALM_CONFIG_LOG")
    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(entry + "\n")
        except OSError as e:
            raise FileIOError(f"cannot append to log file: {e.strerror or e}", phase=LOG_PHASE, path=log_file) from e
