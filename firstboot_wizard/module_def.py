from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

DEFAULT_PRIORITY = 50

# Returned by invoke() when a module has no callback for the hook.
# Kept apart from ordinary failures (any other non-zero status).
HOOK_NOT_FOUND = 127

HookFn = Callable[[Any], Any]


class HookResult(str, Enum):
    NOT_FOUND = "not_found"
    SUCCESS = "success"
    FAILURE = "failure"


class ModuleDefinition:
    """Descriptor a module definition file fills in from its ``register()``.

    Example module file::

        def register(module):
            module.priority = 20

            @module.hook("configure")
            def configure(ctx):
                ...
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.properties: Dict[str, str] = {}
        self.hooks: Dict[str, HookFn] = {}

    def declare(self, prop: str, value: Any) -> None:
        self.properties[prop] = str(value)

    @property
    def priority(self) -> Optional[str]:
        return self.properties.get("priority")

    @priority.setter
    def priority(self, value: Any) -> None:
        self.declare("priority", value)

    def add_hook(self, hook_name: str, fn: HookFn) -> None:
        if not callable(fn):
            raise TypeError(f"hook {hook_name!r} of module {self.name!r} is not callable")
        self.hooks[hook_name] = fn

    def hook(self, hook_name: str) -> Callable[[HookFn], HookFn]:
        def deco(fn: HookFn) -> HookFn:
            self.add_hook(hook_name, fn)
            return fn

        return deco


@dataclass(frozen=True)
class Module:
    name: str
    source_path: str
    properties: Mapping[str, str] = field(default_factory=dict)
    hooks: Mapping[str, HookFn] = field(default_factory=dict)
    priority: int = DEFAULT_PRIORITY

    @classmethod
    def from_definition(cls, definition: ModuleDefinition, source_path: str) -> "Module":
        return cls(
            name=definition.name,
            source_path=source_path,
            properties=MappingProxyType(dict(definition.properties)),
            hooks=MappingProxyType(dict(definition.hooks)),
        )


ModuleList = Tuple[Module, ...]


@dataclass(frozen=True)
class HookOutcome:
    module: str
    hook: str
    status: int
    # Whether the module defines the hook; a callback may itself return 127.
    found: bool = True

    @property
    def result(self) -> HookResult:
        if not self.found:
            return HookResult.NOT_FOUND
        return HookResult.SUCCESS if self.status == 0 else HookResult.FAILURE
