from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from .env import PATHS

logger = logging.getLogger(__name__)


def parse_os_release(text: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            logger.debug("Unparsable os-release line: %s", line)
            continue
        out[key.strip()] = parts[0] if parts else ""
    return out


def load_os_release(path: Optional[str] = None) -> Dict[str, str]:
    """Read os-release; an explicit path wins over the standard locations."""

    candidates: Iterable[str] = [path] if path else PATHS.os_release
    for c in candidates:
        p = Path(c)
        try:
            return parse_os_release(p.read_text(encoding="utf-8", errors="ignore"))
        except OSError:
            continue
    logger.warning("No os-release found in %s", ", ".join(candidates))
    return {}


def product_name(release: Mapping[str, str]) -> str:
    vendor = (release.get("VENDOR_NAME") or "").strip()
    product = (release.get("VENDOR_PRODUCT") or "").strip()
    if vendor and product:
        return f"{vendor} {product}"
    return release.get("PRETTY_NAME") or release.get("NAME") or "Linux"
