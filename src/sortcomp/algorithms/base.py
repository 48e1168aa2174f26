"""
Sort implementation contract.

An algorithm module exposes:

    NAME: str
    STABLE: bool
    sort(v: list) -> None                      # in place, natural order
    sort_by(v: list, compare: Compare) -> None  # in place, explicit comparator

`compare(a, b)` follows cmp semantics: negative if a < b, zero if equal,
positive if a > b. `sort_by(v, natural_compare)` must behave exactly like
`sort(v)`, including stability.
"""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Any, Callable

Compare = Callable[[Any, Any], int]

__all__ = ["Compare", "natural_compare", "load_algorithm"]


def natural_compare(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def load_algorithm(name: str) -> ModuleType:
    """Import `sortcomp.algorithms.<name>` and check it satisfies the contract."""
    if not name or not isinstance(name, str):
        raise ValueError(f"algorithm name must be a non-empty string; got {name!r}")
    try:
        mod = importlib.import_module(f"sortcomp.algorithms.{name}")
    except ImportError as e:
        raise ImportError(f"Could not import algorithm module 'sortcomp.algorithms.{name}': {e!r}") from e

    for attr in ("sort", "sort_by"):
        if not callable(getattr(mod, attr, None)):
            raise AttributeError(f"Algorithm module '{name}' must define a callable `{attr}`")
    if not isinstance(getattr(mod, "NAME", None), str):
        raise AttributeError(f"Algorithm module '{name}' must define `NAME: str`")
    return mod
