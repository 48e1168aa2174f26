"""
Reference stable sort: CPython's `list.sort` (timsort).

`list.sort` is stable, and when a comparison raises it leaves the list as a
permutation of its input, which makes it the trusted side of every
differential comparison.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, List

from .base import Compare

NAME = "stdlib_stable"
STABLE = True


def sort(v: List[Any]) -> None:
    v.sort()


def sort_by(v: List[Any], compare: Compare) -> None:
    v.sort(key=cmp_to_key(compare))
