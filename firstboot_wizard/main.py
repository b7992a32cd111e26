from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .context import WizardContext
from .dispatcher import HookDispatcher
from .lib.dialog import Dialog, WizardAborted
from .lib.env import PATHS
from .lib.os_release import load_os_release, product_name
from .lib.tty import current_tty, is_interactive
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_stages
from .registry import ModuleRegistry
from .state_store import ensure_defaults, load_state, save_state

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = PATHS.state_default


def build_context(cfg: Dict[str, Any], answers: Dict[str, Any]) -> WizardContext:
    product = product_name(load_os_release(cfg.get("os_release")))
    dialog = Dialog(product, program=str(cfg.get("dialog") or "dialog"), dry_run=bool(cfg.get("dry_run")))
    return WizardContext(dialog=dialog, config=cfg, answers=dict(answers))


def run(
    *,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Discover modules and run every stage, persisting state for resume."""

    actual_log_path = configure_logging(
        log_path=log_path, level=logging.DEBUG if verbose else logging.INFO
    )

    state = ensure_defaults(load_state(state_path))
    # CLI overrides apply to this run only and never reach the saved config.
    cfg = dict(state["config"])
    cfg.update({k: v for k, v in (overrides or {}).items() if v is not None})
    exe = state["execution"]
    exe["log_path"] = actual_log_path

    if cfg.get("require_tty") and not cfg.get("dry_run") and not is_interactive():
        raise RuntimeError("firstboot-wizard needs an interactive terminal (use --dry-run to test)")
    logger.info("Running on %s", current_tty() or "no tty")

    registry = ModuleRegistry(cfg.get("override_dir"), cfg.get("default_dir"))
    dispatcher = HookDispatcher(registry)
    ctx = build_context(cfg, state.get("answers") or {})

    try:
        modules = registry.discover_and_load()
        exe["module_order"] = [m.name for m in modules]
        exe["disabled_modules"] = list(registry.disabled)
        exe["failed_modules"] = dict(registry.failed)

        result = run_stages(
            state=state,
            dispatcher=dispatcher,
            ctx=ctx,
            stages=list(cfg.get("stages") or []),
            start_at=start_at,
            stop_after=stop_after,
            force=force,
            persist=not cfg.get("dry_run"),
        )
        state = result.state
        exe["summary"] = {"ran_stages": result.ran_stages, "skipped_stages": result.skipped_stages}
        return state
    except WizardAborted:
        logger.info("Wizard aborted by user during %s", exe.get("current_stage"))
        exe["aborted"] = True
        raise
    except Exception as e:
        logger.exception("Wizard failed")
        exe.setdefault("errors", []).append({"stage": exe.get("current_stage"), "error": str(e)})
        raise
    finally:
        save_state(state_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="firstboot-wizard")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to wizard state (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to wizard log")
    p.add_argument("--override-dir", default=None, help="Site module directory (wins over defaults)")
    p.add_argument("--default-dir", default=None, help="Shipped module directory")
    p.add_argument("--credentials-dir", default=None, help="Credential directory (default $CREDENTIALS_DIRECTORY)")
    p.add_argument("--start-at", default=None, help="Start at stage (e.g. configure)")
    p.add_argument("--stop-after", default=None, help="Stop after stage")
    p.add_argument("--force", action="store_true", help="Re-run stages even if marked completed")
    p.add_argument("--dry-run", action="store_true", default=None, help="Answer prompts with defaults, run nothing")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = p.parse_args(argv)

    try:
        run(
            state_path=args.state,
            log_path=args.log,
            overrides={
                "override_dir": args.override_dir,
                "default_dir": args.default_dir,
                "credentials_dir": args.credentials_dir,
                "dry_run": args.dry_run,
            },
            start_at=args.start_at,
            stop_after=args.stop_after,
            force=args.force,
            verbose=args.verbose,
        )
    except WizardAborted:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
