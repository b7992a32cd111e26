"""
Shared test fixtures.
"""

import os
import textwrap
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from firstboot_wizard.lib.dialog import DIALOG_OK, DialogResult


def write_module(
    directory: Path,
    name: str,
    *,
    priority: Optional[int] = None,
    hooks: Tuple[str, ...] = ("configure",),
    status: int = 0,
    trace: Optional[Path] = None,
    tag: str = "",
) -> Path:
    """Write a module definition whose hooks append "<tag or name>:<hook>" to ctx."""

    directory.mkdir(parents=True, exist_ok=True)
    label = tag or name
    lines = ["def register(module):"]
    if trace is not None:
        lines.insert(0, f"open({str(trace)!r}, 'a').write({label!r} + '\\n')")
    if priority is not None:
        lines.append(f"    module.priority = {priority}")
    for hook in hooks:
        lines.append(f"    def _{hook}(ctx):")
        lines.append(f"        ctx.append({label!r} + ':{hook}')")
        lines.append(f"        return {status}")
    for hook in hooks:
        lines.append(f"    module.add_hook({hook!r}, _{hook})")
    if len(lines) == 1 or lines[-1] == "def register(module):":
        lines.append("    pass")
    path = directory / f"{name}.py"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def write_raw_module(directory: Path, name: str, body: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.py"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def disable_module(directory: Path, name: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    link = directory / f"{name}.py"
    os.symlink(os.devnull, link)
    return link


@pytest.fixture
def module_dirs(tmp_path: Path) -> Tuple[Path, Path]:
    """Return (override_dir, default_dir); neither exists yet."""
    return tmp_path / "etc" / "modules", tmp_path / "usr" / "modules"


class FakeDialog:
    """Scripted stand-in for lib.dialog.Dialog.

    ``answers`` is consumed in order by the input widgets (message boxes
    never consume one); each entry is a DialogResult or a plain
    string (treated as OK with that value).
    """

    def __init__(self, answers=None, product: str = "TestOS") -> None:
        self.product = product
        self.answers: List = list(answers or [])
        self.shown: List[Tuple[str, str]] = []
        self.warnings: List[str] = []

    def _next(self, kind: str, text: str, default: str = "") -> DialogResult:
        self.shown.append((kind, text))
        if not self.answers:
            return DialogResult(DIALOG_OK, default)
        a = self.answers.pop(0)
        return a if isinstance(a, DialogResult) else DialogResult(DIALOG_OK, a)

    def msgbox(self, text, *, title=""):
        self.shown.append(("msgbox", text))
        return DialogResult(DIALOG_OK, "")

    def yesno(self, text, *, title="", default_no=False):
        return self._next("yesno", text)

    def inputbox(self, text, *, title="", default=""):
        return self._next("inputbox", text, default)

    def passwordbox(self, text, *, title="", default=""):
        return self._next("passwordbox", text, default)

    def menu(self, text, items, *, title="", default=None):
        return self._next("menu", text, default or "")

    def warn(self, text):
        self.warnings.append(text)
        return DialogResult(DIALOG_OK, "")

    def ask(self, prompt):
        return prompt()


@pytest.fixture
def shipped_modules_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "firstboot_wizard" / "modules"
