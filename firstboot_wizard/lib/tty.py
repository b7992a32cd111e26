from __future__ import annotations

import os
import sys
from typing import Optional, TextIO


def is_interactive(stream: Optional[TextIO] = None) -> bool:
    s = stream if stream is not None else sys.stdin
    try:
        return s.isatty()
    except (AttributeError, ValueError):
        return False


def current_tty() -> Optional[str]:
    try:
        return os.ttyname(sys.stdin.fileno())
    except (OSError, ValueError, AttributeError):
        return None
