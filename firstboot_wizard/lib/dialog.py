from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .command import run_cmd

logger = logging.getLogger(__name__)

DIALOG_OK = 0
DIALOG_CANCEL = 1
DIALOG_ESC = 255
CANCEL_CODES = frozenset({DIALOG_CANCEL, DIALOG_ESC})

QUIT_PROMPT = "Do you really want to quit the setup?"


class WizardAborted(Exception):
    """The user cancelled a prompt and confirmed quitting the wizard."""


@dataclass(frozen=True)
class DialogResult:
    code: int
    value: str = ""

    @property
    def ok(self) -> bool:
        return self.code == DIALOG_OK

    @property
    def cancelled(self) -> bool:
        return self.code in CANCEL_CODES


class Dialog:
    """Thin wrapper around dialog(1).

    Every screen carries the product name as its back title. With
    dry_run=True nothing is spawned and each prompt answers with its default.
    """

    def __init__(
        self,
        product: str,
        *,
        program: str = "dialog",
        dry_run: bool = False,
        height: int = 0,
        width: int = 0,
    ) -> None:
        self.product = product
        self.program = program
        self.dry_run = dry_run
        self.height = height
        self.width = width

    def _run(self, widget: Sequence[str], *, default: str = "", secret: bool = False) -> DialogResult:
        argv = [self.program, "--stdout", "--backtitle", self.product, *widget]
        if self.dry_run:
            logger.info("Dialog (dry run) %s -> %r", widget[0], "***" if secret else default)
            return DialogResult(DIALOG_OK, default)

        res = run_cmd(argv, check=False, log_output=not secret)
        return DialogResult(res.returncode, res.stdout.strip("\n"))

    def _size(self) -> List[str]:
        return [str(self.height), str(self.width)]

    def msgbox(self, text: str, *, title: str = "") -> DialogResult:
        return self._run(["--title", title, "--msgbox", text, *self._size()])

    def yesno(self, text: str, *, title: str = "", default_no: bool = False) -> DialogResult:
        extra = ["--defaultno"] if default_no else []
        return self._run([*extra, "--title", title, "--yesno", text, *self._size()])

    def inputbox(self, text: str, *, title: str = "", default: str = "") -> DialogResult:
        return self._run(
            ["--title", title, "--inputbox", text, *self._size(), default], default=default
        )

    def passwordbox(self, text: str, *, title: str = "", default: str = "") -> DialogResult:
        return self._run(
            ["--insecure", "--title", title, "--passwordbox", text, *self._size()],
            default=default,
            secret=True,
        )

    def menu(
        self,
        text: str,
        items: Sequence[Tuple[str, str]],
        *,
        title: str = "",
        default: Optional[str] = None,
    ) -> DialogResult:
        if default is None and items:
            default = items[0][0]
        widget: List[str] = []
        if default:
            widget += ["--default-item", default]
        widget += ["--title", title, "--menu", text, *self._size(), "0"]
        for tag, label in items:
            widget += [tag, label]
        return self._run(widget, default=default or "")

    def warn(self, text: str) -> DialogResult:
        logger.warning("%s", text)
        return self.msgbox(text, title="Warning")

    def confirm_quit(self) -> bool:
        return self.yesno(QUIT_PROMPT, title="Quit", default_no=True).ok

    def ask(self, prompt: Callable[[], DialogResult]) -> DialogResult:
        """Show ``prompt`` until it is answered.

        A cancel or escape asks whether to quit; confirming raises
        WizardAborted, declining shows the prompt again.
        """

        while True:
            res = prompt()
            if not res.cancelled:
                return res
            if self.confirm_quit():
                logger.info("User chose to quit")
                raise WizardAborted("cancelled by user")
