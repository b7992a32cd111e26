from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Tuple

from .module_def import DEFAULT_PRIORITY

logger = logging.getLogger(__name__)

PropertyGetter = Callable[[str, str, str], str]


def resolve_priority(name: str, get_property: PropertyGetter) -> int:
    raw = get_property(name, "priority", str(DEFAULT_PRIORITY))
    try:
        return int(str(raw).strip())
    except ValueError:
        logger.warning(
            "Module %s declares non-integer priority %r; using %d", name, raw, DEFAULT_PRIORITY
        )
        return DEFAULT_PRIORITY


def prioritize(unordered_names: Iterable[str], get_property: PropertyGetter) -> List[Tuple[str, int]]:
    """Pair each name with its priority, ascending.

    sorted() is stable, so modules sharing a priority keep the order they
    were discovered in (which is name order).
    """

    pairs = [(n, resolve_priority(n, get_property)) for n in unordered_names]
    ordered = sorted(pairs, key=lambda p: p[1])
    logger.info("Module order: %s", ", ".join(f"{n}({p})" for n, p in ordered) or "(none)")
    return ordered


def order(unordered_names: Iterable[str], get_property: PropertyGetter) -> List[str]:
    return [n for n, _ in prioritize(unordered_names, get_property)]
