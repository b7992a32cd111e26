from __future__ import annotations

from .command import run_cmd


def set_password(user: str, password: str, *, dry_run: bool = False) -> bool:
    """Set a password via chpasswd, which does the hashing.

    The password only travels on stdin, never on the command line.
    """

    return run_cmd(
        ["chpasswd"], check=False, input_text=f"{user}:{password}\n", dry_run=dry_run
    ).ok


def set_root_password(password: str, *, dry_run: bool = False) -> bool:
    return set_password("root", password, dry_run=dry_run)
