from __future__ import annotations

import logging
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)


def _list(what: str) -> List[str]:
    res = run_cmd(["localectl", "--no-pager", what], check=False)
    if not res.ok:
        logger.warning("localectl %s failed (%d)", what, res.returncode)
        return []
    return [line.strip() for line in res.stdout.splitlines() if line.strip()]


def list_locales() -> List[str]:
    return _list("list-locales")


def list_keymaps() -> List[str]:
    return _list("list-keymaps")


def set_locale(locale: str, *, dry_run: bool = False) -> bool:
    return run_cmd(["localectl", "set-locale", f"LANG={locale}"], check=False, dry_run=dry_run).ok


def set_keymap(keymap: str, *, dry_run: bool = False) -> bool:
    return run_cmd(["localectl", "set-keymap", keymap], check=False, dry_run=dry_run).ok
