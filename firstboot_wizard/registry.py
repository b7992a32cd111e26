from __future__ import annotations

import dataclasses
import importlib.util
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .module_def import Module, ModuleDefinition, ModuleList
from .sorter import prioritize

logger = logging.getLogger(__name__)

MODULE_SUFFIX = ".py"

# Import names for loaded definitions live under this prefix so they never
# collide with real packages (a module file may well be called "locale.py").
_IMPORT_PREFIX = "firstboot_wizard._loaded"


def _list_candidates(directory: Optional[str]) -> List[Path]:
    if not directory:
        return []
    d = Path(directory)
    if not d.is_dir():
        logger.debug("Module directory %s does not exist", d)
        return []

    out: List[Path] = []
    for entry in d.iterdir():
        if not entry.name.endswith(MODULE_SUFFIX):
            continue
        if entry.name.startswith(("_", ".")):
            continue
        # Dangling links still count: a link to /dev/null is the disable marker.
        if entry.is_symlink() or entry.is_file():
            out.append(entry)
    return out


def _is_null_link(path: Path) -> bool:
    if not path.is_symlink():
        return False
    target = os.readlink(path)
    if target == os.devnull:
        return True
    try:
        return path.resolve() == Path(os.devnull).resolve()
    except OSError:
        return False


def _module_name(path: Path) -> str:
    return path.name[: -len(MODULE_SUFFIX)]


def _load_definition(name: str, path: Path) -> ModuleDefinition:
    spec = importlib.util.spec_from_file_location(f"{_IMPORT_PREFIX}.{name}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load module definition from {path}")
    pymod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(pymod)

    register = getattr(pymod, "register", None)
    if not callable(register):
        raise ImportError(f"{path} does not define register(module)")

    definition = ModuleDefinition(name)
    register(definition)
    return definition


class ModuleRegistry:
    """Discovers, loads and orders wizard modules.

    Two search locations are scanned: the override directory (site
    configuration) and the default directory (shipped modules). For each
    module name the override entry wins. An override entry that is a symlink
    to /dev/null disables the module.
    """

    def __init__(self, override_dir: Optional[str], default_dir: Optional[str]) -> None:
        self.override_dir = override_dir
        self.default_dir = default_dir
        self._staged: Dict[str, Module] = {}
        self._modules: Optional[ModuleList] = None
        self.disabled: List[str] = []
        self.failed: Dict[str, str] = {}

    @property
    def modules(self) -> ModuleList:
        return self._modules if self._modules is not None else ()

    def names(self) -> List[str]:
        return [m.name for m in self.modules]

    def get(self, name: str) -> Optional[Module]:
        for m in self.modules:
            if m.name == name:
                return m
        return None

    def get_property(self, module_name: str, property_name: str, default: str = "") -> str:
        mod = self._staged.get(module_name)
        if mod is None:
            return default
        return mod.properties.get(property_name, default)

    def candidates(self) -> List[Tuple[str, Path]]:
        """Resolve (name, path) pairs, override entries first per name."""

        entries = _list_candidates(self.override_dir) + _list_candidates(self.default_dir)
        # Stable sort by basename keeps the override entry ahead of the default one.
        entries.sort(key=lambda p: p.name)

        seen: Dict[str, Path] = {}
        for p in entries:
            name = _module_name(p)
            if name not in seen:
                seen[name] = p
        return list(seen.items())

    def discover_and_load(self) -> ModuleList:
        if self._modules is not None:
            logger.debug("Modules already loaded; skipping discovery")
            return self.modules

        for name, path in self.candidates():
            if _is_null_link(path):
                logger.info("Module %s disabled by %s", name, path)
                self.disabled.append(name)
                continue
            try:
                definition = _load_definition(name, path)
            except Exception as e:
                logger.warning("Failed to load module %s from %s: %s", name, path, e)
                self.failed[name] = str(e)
                continue
            self._staged[name] = Module.from_definition(definition, str(path))
            logger.info("Loaded module %s from %s", name, path)

        self._freeze(list(self._staged))
        return self.modules

    def _freeze(self, names: Sequence[str]) -> None:
        self._modules = tuple(
            dataclasses.replace(self._staged[n], priority=p)
            for n, p in prioritize(names, self.get_property)
        )
