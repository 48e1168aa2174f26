"""
Property helpers for validating sorting results.

These functions provide lightweight checks used by the tests, the
differential sweep and the panic-safety verifier.

Public API (stable):
    is_nondecreasing(xs) -> bool
    first_nondecreasing_violation_index(xs) -> int | None
    is_permutation(a, b) -> bool
    same_objects(a, b) -> bool
    first_stability_violation(original, out) -> int | None
    assert_no_mutation(before, after) -> None

Notes
-----
- Stability cannot be inferred from values alone when equal keys are
  indistinguishable. `first_stability_violation` therefore works on records
  carrying a `key` and a unique `extra` tag (see `KeyedRecord`), and checks
  the relative order of equal keys against the input.
- `same_objects` compares by identity, not value: it is what detects a sort
  that duplicated one reference and dropped another.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Hashable, Optional, Sequence

from ..values.types import deep_equal

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "same_objects",
    "first_stability_violation",
    "assert_no_mutation",
]


def is_nondecreasing(xs: Sequence[Any]) -> bool:
    """Return True iff not xs[i+1] < xs[i] for all i."""
    return first_nondecreasing_violation_index(xs) is None


def first_nondecreasing_violation_index(xs: Sequence[Any]) -> Optional[int]:
    """
    Return the first index i where xs[i+1] < xs[i], or None if nondecreasing.

    Useful for precise error messages:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if xs[i + 1] < xs[i]:
            return i
    return None


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """Return True iff `a` and `b` contain exactly the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def same_objects(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """True iff `b` holds exactly the same objects as `a`, each as often."""
    if len(a) != len(b):
        return False
    return Counter(map(id, a)) == Counter(map(id, b))


def first_stability_violation(original: Sequence[Any], out: Sequence[Any]) -> Optional[int]:
    """
    Return the first output index whose record broke input order among equal
    keys, or None.

    Records must expose `key` and an `extra` tag unique within `original`.
    """
    position = {rec.extra: i for i, rec in enumerate(original)}
    if len(position) != len(original):
        raise ValueError("first_stability_violation needs unique `extra` tags")
    for i in range(len(out) - 1):
        a, b = out[i], out[i + 1]
        if a.key == b.key and position[a.extra] > position[b.extra]:
            return i
    return None


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Assert that two sequences are element-wise deep-equal.

    Raises AssertionError with a concise message if they differ.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if not deep_equal(x, y):
            raise AssertionError(
                f"Input mutated at index {i}: before={x!r}, after={y!r}"
            )
