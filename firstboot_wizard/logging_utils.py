from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "firstboot-wizard.log"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _file_handler(log_path: str) -> logging.FileHandler:
    Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_path)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    console_level: int | None = None,
) -> str:
    """Configure root logging for a wizard run and return the log file in use.

    The dialogs own the terminal, so console output is off unless
    console_level is given (it then goes to stderr). If log_path cannot be
    opened (read-only /var/log on some images) the log goes to
    ./firstboot-wizard.log instead.

    Calling it again is a no-op that returns the path chosen the first time.
    """

    root = logging.getLogger()
    if getattr(root, "_firstboot_log_path", None):
        return root._firstboot_log_path  # type: ignore[attr-defined]

    root.setLevel(min(level, console_level) if console_level is not None else level)
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    handlers: List[logging.Handler] = []

    try:
        fh = _file_handler(log_path)
        chosen = log_path
    except OSError:
        chosen = str(Path.cwd() / FALLBACK_LOG_NAME)
        fh = _file_handler(chosen)
    fh.setLevel(level)
    handlers.append(fh)

    if console_level is not None:
        console = logging.StreamHandler()
        console.setLevel(console_level)
        handlers.append(console)

    for h in handlers:
        h.setFormatter(fmt)
        root.addHandler(h)

    root._firstboot_log_path = chosen  # type: ignore[attr-defined]
    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen
    )
    return chosen
