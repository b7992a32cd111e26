"""
Tests for hook dispatch over the frozen module list.
"""

import pytest
from conftest import write_module, write_raw_module

from firstboot_wizard.dispatcher import HookDispatcher
from firstboot_wizard.lib.dialog import WizardAborted
from firstboot_wizard.module_def import HOOK_NOT_FOUND, HookResult
from firstboot_wizard.registry import ModuleRegistry


@pytest.fixture
def dispatcher(module_dirs):
    _, default_dir = module_dirs
    write_module(default_dir, "alpha", priority=10, hooks=("welcome", "configure"))
    write_module(default_dir, "beta", priority=20, hooks=("configure",), status=3)
    write_module(default_dir, "gamma", priority=30, hooks=("configure", "apply"))
    reg = ModuleRegistry(None, str(default_dir))
    reg.discover_and_load()
    return HookDispatcher(reg)


class TestHasHook:
    def test_present(self, dispatcher):
        assert dispatcher.has_hook("alpha", "welcome")

    def test_absent(self, dispatcher):
        assert not dispatcher.has_hook("beta", "welcome")

    def test_unknown_module(self, dispatcher):
        assert not dispatcher.has_hook("nope", "welcome")


class TestInvoke:
    def test_success(self, dispatcher):
        calls = []
        assert dispatcher.invoke("alpha", "configure", calls) == 0
        assert calls == ["alpha:configure"]

    def test_failure_status_returned(self, dispatcher):
        assert dispatcher.invoke("beta", "configure", []) == 3

    def test_absent_hook_is_distinct_from_failure(self, dispatcher):
        assert dispatcher.invoke("beta", "apply", []) == HOOK_NOT_FOUND
        assert dispatcher.invoke("nope", "apply", []) == HOOK_NOT_FOUND

    def test_exception_counts_as_failure(self, module_dirs):
        _, default_dir = module_dirs
        write_raw_module(
            default_dir,
            "boom",
            """
            def register(module):
                @module.hook("apply")
                def apply(ctx):
                    raise ValueError("bad")
            """,
        )
        reg = ModuleRegistry(None, str(default_dir))
        reg.discover_and_load()
        assert HookDispatcher(reg).invoke("boom", "apply") == 1

    def test_bool_and_none_returns(self, module_dirs):
        _, default_dir = module_dirs
        write_raw_module(
            default_dir,
            "flags",
            """
            def register(module):
                module.add_hook("none", lambda ctx: None)
                module.add_hook("yes", lambda ctx: True)
                module.add_hook("no", lambda ctx: False)
            """,
        )
        reg = ModuleRegistry(None, str(default_dir))
        reg.discover_and_load()
        d = HookDispatcher(reg)
        assert d.invoke("flags", "none") == 0
        assert d.invoke("flags", "yes") == 0
        assert d.invoke("flags", "no") == 1

    def test_abort_propagates(self, module_dirs):
        _, default_dir = module_dirs
        write_raw_module(
            default_dir,
            "quitter",
            """
            from firstboot_wizard.lib.dialog import WizardAborted

            def register(module):
                @module.hook("configure")
                def configure(ctx):
                    raise WizardAborted("user quit")
            """,
        )
        reg = ModuleRegistry(None, str(default_dir))
        reg.discover_and_load()
        with pytest.raises(WizardAborted):
            HookDispatcher(reg).invoke("quitter", "configure")


class TestRunHookForAll:
    def test_runs_in_priority_order(self, dispatcher):
        calls = []
        dispatcher.run_hook_for_all("configure", calls)
        assert calls == ["alpha:configure", "beta:configure", "gamma:configure"]

    def test_failure_does_not_stop_later_modules(self, dispatcher):
        calls = []
        outcomes = dispatcher.run_hook_for_all("configure", calls)
        assert "gamma:configure" in calls
        assert [o.result for o in outcomes] == [
            HookResult.SUCCESS,
            HookResult.FAILURE,
            HookResult.SUCCESS,
        ]

    def test_unimplemented_hook_is_harmless(self, dispatcher):
        before = dispatcher.registry.modules
        calls = []
        outcomes = dispatcher.run_hook_for_all("nobody-implements-this", calls)
        assert calls == []
        assert all(o.result is HookResult.NOT_FOUND for o in outcomes)
        assert dispatcher.registry.modules is before

    def test_passes_are_independent(self, dispatcher):
        calls = []
        dispatcher.run_hook_for_all("welcome", calls)
        dispatcher.run_hook_for_all("apply", calls)
        dispatcher.run_hook_for_all("welcome", calls)
        assert calls == ["alpha:welcome", "gamma:apply", "alpha:welcome"]

    def test_empty_registry(self, module_dirs):
        reg = ModuleRegistry(*[str(d) for d in module_dirs])
        reg.discover_and_load()
        assert HookDispatcher(reg).run_hook_for_all("welcome") == []

    def test_callback_returning_127_is_a_failure(self, module_dirs):
        _, default_dir = module_dirs
        write_raw_module(
            default_dir,
            "odd",
            """
            def register(module):
                module.add_hook("apply", lambda ctx: 127)
            """,
        )
        write_module(default_dir, "plain", hooks=("configure",))
        reg = ModuleRegistry(None, str(default_dir))
        reg.discover_and_load()

        outcomes = {o.module: o for o in HookDispatcher(reg).run_hook_for_all("apply", [])}

        assert outcomes["odd"].status == 127
        assert outcomes["odd"].result is HookResult.FAILURE
        assert outcomes["plain"].result is HookResult.NOT_FOUND
