"""
Unstable heapsort, benchmarked alongside the stable sorts as a baseline.

Not used by the differential tests: equal elements may be reordered.
"""

from __future__ import annotations

from typing import Any, List

from .base import Compare, natural_compare

NAME = "heap_unstable"
STABLE = False


def sort(v: List[Any]) -> None:
    sort_by(v, natural_compare)


def sort_by(v: List[Any], compare: Compare) -> None:
    n = len(v)
    for start in range(n // 2 - 1, -1, -1):
        _sift_down(v, start, n, compare)
    for end in range(n - 1, 0, -1):
        v[0], v[end] = v[end], v[0]
        _sift_down(v, 0, end, compare)


def _sift_down(v: List[Any], node: int, end: int, compare: Compare) -> None:
    while True:
        child = 2 * node + 1
        if child >= end:
            return
        if child + 1 < end and compare(v[child], v[child + 1]) < 0:
            child += 1
        if compare(v[node], v[child]) >= 0:
            return
        v[node], v[child] = v[child], v[node]
        node = child
