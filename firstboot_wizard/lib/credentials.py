from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

LOCALE = "firstboot.locale"
KEYMAP = "firstboot.keymap"
ROOT_PASSWORD = "passwd.plaintext-password.root"


def read_credential(name: str, directory: Optional[str] = None) -> Optional[str]:
    """Return a pre-seeded credential, or None when it was not provided."""

    d = directory or os.environ.get("CREDENTIALS_DIRECTORY")
    if not d:
        return None
    p = Path(d) / name
    try:
        value = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Cannot read credential %s: %s", p, e)
        return None

    if value.endswith("\n"):
        value = value[:-1]
    logger.info("Using credential %s", name)
    return value
