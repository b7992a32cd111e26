from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .lib.credentials import read_credential
from .lib.dialog import Dialog


@dataclass
class WizardContext:
    """Everything a module hook gets to see.

    ``answers`` is persisted in the state file; ``secrets`` never leaves memory.
    """

    dialog: Dialog
    config: Dict[str, Any] = field(default_factory=dict)
    answers: Dict[str, Any] = field(default_factory=dict)
    secrets: Dict[str, str] = field(default_factory=dict)

    @property
    def dry_run(self) -> bool:
        return bool(self.config.get("dry_run", False))

    def credential(self, name: str) -> Optional[str]:
        return read_credential(name, self.config.get("credentials_dir"))
