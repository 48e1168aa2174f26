"""
Oracle for sorting correctness.

The reference algorithm (`stdlib_stable`, i.e. CPython's timsort) is the
ground truth:
- Correct total order for anything defining `<`
- Deterministic and portable
- Stable, so it also fixes the expected order of equal keys

Public API (stable):
    oracle_sort(a: list) -> list
    equals_oracle(a: list, out: list) -> bool

Conventions:
- The oracle never mutates its input and always returns a **new** list.
- "Equal" means deep-equal element by element, not just `==`.
"""

from __future__ import annotations

from typing import Any, List

from ..algorithms import stdlib_stable
from ..values.types import deep_equal

__all__ = ["oracle_sort", "equals_oracle"]


def oracle_sort(a: List[Any]) -> List[Any]:
    """Return a new list with the elements of `a` in reference order."""
    out = list(a)
    stdlib_stable.sort(out)
    return out


def equals_oracle(a: List[Any], out: List[Any]) -> bool:
    """True iff `out` deep-equals `oracle_sort(a)` at every position."""
    expected = oracle_sort(a)
    if len(expected) != len(out):
        return False
    return all(deep_equal(x, y) for x, y in zip(expected, out))
