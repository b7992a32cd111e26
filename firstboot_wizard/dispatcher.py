from __future__ import annotations

import logging
from typing import Any, List

from .lib.dialog import WizardAborted
from .module_def import HOOK_NOT_FOUND, HookOutcome
from .registry import ModuleRegistry

logger = logging.getLogger(__name__)


def _to_status(value: Any) -> int:
    if value is None or value is True:
        return 0
    if value is False:
        return 1
    return int(value)


class HookDispatcher:
    """Runs a named hook across the registry's frozen module list.

    Keeps no state between hook names; every run_hook_for_all() call is a
    full, independent pass.
    """

    def __init__(self, registry: ModuleRegistry) -> None:
        self.registry = registry

    def has_hook(self, module: str, hook_name: str) -> bool:
        mod = self.registry.get(module)
        return mod is not None and hook_name in mod.hooks

    def invoke(self, module: str, hook_name: str, ctx: Any = None) -> int:
        """Call ``module``'s ``hook_name`` callback.

        Returns 0 on success, HOOK_NOT_FOUND when the module has no such hook,
        and any other non-zero value on failure. Exceptions raised by the
        callback count as failure; WizardAborted always propagates.
        """

        mod = self.registry.get(module)
        fn = mod.hooks.get(hook_name) if mod is not None else None
        if fn is None:
            logger.debug("Module %s has no %s hook", module, hook_name)
            return HOOK_NOT_FOUND

        logger.info("Running %s hook of module %s", hook_name, module)
        try:
            status = _to_status(fn(ctx))
        except WizardAborted:
            raise
        except Exception:
            logger.exception("Hook %s of module %s raised", hook_name, module)
            return 1

        if status != 0:
            logger.warning("Hook %s of module %s returned %d", hook_name, module, status)
        return status

    def run_hook_for_all(self, hook_name: str, ctx: Any = None) -> List[HookOutcome]:
        # Per-module failures are reported by the modules themselves; the pass
        # as a whole always completes.
        outcomes: List[HookOutcome] = []
        for mod in self.registry.modules:
            if not self.has_hook(mod.name, hook_name):
                logger.debug("Module %s has no %s hook", mod.name, hook_name)
                outcomes.append(
                    HookOutcome(module=mod.name, hook=hook_name, status=HOOK_NOT_FOUND, found=False)
                )
                continue
            status = self.invoke(mod.name, hook_name, ctx)
            outcomes.append(HookOutcome(module=mod.name, hook=hook_name, status=status))
        return outcomes
