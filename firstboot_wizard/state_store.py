from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .lib.env import PATHS

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _yaml():
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "YAML state requested but PyYAML is not available. "
            "Use JSON state or install firstboot-wizard[yaml]."
        ) from e
    return yaml


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    text = p.read_text(encoding="utf-8")
    if _detect_format(p) in {"yaml", "yml"}:
        data = _yaml().safe_load(text) or {}
    else:
        data = json.loads(text)

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(_yaml().safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.debug("State saved to %s", p)


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding user values)."""

    state.setdefault("version", 1)
    state.setdefault("config", {})
    state.setdefault("answers", {})
    state.setdefault("execution", {})

    cfg = state["config"]
    cfg.setdefault("override_dir", PATHS.override_modules)
    cfg.setdefault("default_dir", PATHS.default_modules)
    # None means $CREDENTIALS_DIRECTORY.
    cfg.setdefault("credentials_dir", None)
    # None means /etc/os-release, then /usr/lib/os-release.
    cfg.setdefault("os_release", None)
    cfg.setdefault("dialog", "dialog")
    cfg.setdefault("stages", ["welcome", "configure", "apply", "summary"])
    cfg.setdefault("dry_run", False)
    cfg.setdefault("require_tty", True)

    exe = state["execution"]
    exe.setdefault("current_stage", None)
    exe.setdefault("completed_stages", [])
    exe.setdefault("module_order", [])
    exe.setdefault("errors", [])

    return state


def mark_stage_completed(state: Dict[str, Any], stage: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_stages", [])
    if stage not in completed:
        completed.append(stage)


def is_stage_completed(state: Dict[str, Any], stage: str) -> bool:
    exe = state.get("execution") or {}
    completed = exe.get("completed_stages") or []
    return stage in completed
