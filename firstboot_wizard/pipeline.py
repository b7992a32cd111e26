from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .context import WizardContext
from .dispatcher import HookDispatcher
from .state_store import is_stage_completed, mark_stage_completed

logger = logging.getLogger(__name__)

DEFAULT_STAGES = ("welcome", "configure", "apply", "summary")


@dataclass(frozen=True)
class StageResult:
    state: Dict[str, Any]
    ran_stages: List[str]
    skipped_stages: List[str]


def run_stages(
    *,
    state: Dict[str, Any],
    dispatcher: HookDispatcher,
    ctx: WizardContext,
    stages: Sequence[str] = DEFAULT_STAGES,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
    persist: bool = True,
) -> StageResult:
    """Dispatch each stage's hook over all modules, with resume semantics.

    With persist=False (dry runs) answers and completed stages are left
    untouched, so a later real run still does everything.
    """

    if start_at is not None and start_at not in stages:
        raise ValueError(f"Unknown stage {start_at!r}; expected one of {', '.join(stages)}")

    ran: List[str] = []
    skipped: List[str] = []
    exe = state.setdefault("execution", {})
    hooks_log = exe.setdefault("hooks", {})

    started = start_at is None

    for stage in stages:
        if not started:
            if stage == start_at:
                started = True
            else:
                continue

        exe["current_stage"] = stage

        if (not force) and is_stage_completed(state, stage):
            logger.info("Skipping stage %s (already completed)", stage)
            skipped.append(stage)
        else:
            logger.info("Running stage %s", stage)
            outcomes = dispatcher.run_hook_for_all(stage, ctx)
            hooks_log[stage] = {o.module: o.result.value for o in outcomes}
            if persist:
                state["answers"] = dict(ctx.answers)
                mark_stage_completed(state, stage)
            ran.append(stage)

        if stop_after is not None and stage == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    exe["current_stage"] = None
    return StageResult(state=state, ran_stages=ran, skipped_stages=skipped)
