import logging
import os
import sys
from pathlib import Path
from typing import Optional


DEFAULT_BASE_DIR = "/service"
BASE_DIR_ENV = "SVDIR"
LOG_FILE_ENV = "SVDASH_LOG"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def is_tty() -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    try:
        return sys.stdin.isatty() and sys.stdout.isatty()
    except Exception:
        return False


def resolve_base_dir(arg: Optional[str] = None) -> Path:
    """Resolve the service directory: CLI argument, then $SVDIR, then /service."""
    if arg:
        return Path(arg)
    env = os.getenv(BASE_DIR_ENV, "").strip()
    if env:
        return Path(env)
    return Path(DEFAULT_BASE_DIR)


def setup_logging(log_file: Optional[str] = None) -> None:
    """Route package logs to a file named by $SVDASH_LOG, or nowhere.

    Raises OSError when the log file cannot be opened.

    The terminal belongs to the dashboard while it runs, so nothing is ever
    logged to stdout/stderr.
    """
    if log_file is None:
        log_file = os.getenv(LOG_FILE_ENV, "").strip() or None
    root = logging.getLogger("svdash")
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.propagate = False
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.setLevel(logging.DEBUG)
    else:
        handler = logging.NullHandler()
        root.setLevel(logging.WARNING)
    root.addHandler(handler)
