from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parents[1]


@dataclass(frozen=True)
class Paths:
    override_modules: str = "/etc/firstboot-wizard/modules"
    default_modules: str = str(_PACKAGE_DIR / "modules")
    state_default: str = "/var/lib/firstboot-wizard/state.json"
    log_default: str = "/var/log/firstboot-wizard.log"
    os_release: tuple = ("/etc/os-release", "/usr/lib/os-release")


PATHS = Paths()
