from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
    log_output: bool = True,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command line (never stdin).
    - stdout is captured; stdin is inherited unless input_text is given, so
      interactive programs still talk to the terminal.
    - log_output=False keeps captured output (e.g. a typed password) out of the log.
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=dict(os.environ, **(env or {})),
        )
    except FileNotFoundError as e:
        if check:
            raise RuntimeError(f"Command not found: {argv_list[0]}") from e
        logger.warning("Command not found: %s", argv_list[0])
        return CmdResult(argv=argv_list, returncode=127, stdout="", stderr=str(e))

    if log_output and p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        raise RuntimeError(f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}\n{p.stderr}")

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)
