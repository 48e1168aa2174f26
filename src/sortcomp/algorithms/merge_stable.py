"""
Candidate stable sort: insertion-sorted small runs merged bottom-up.

Each merge copies only the left run into a scratch buffer and fills the hole
left behind from both sides. The hole always has exactly as many slots as
the buffer has unmerged elements, so when the comparator raises, the buffer
is written back into the hole and the list remains a permutation of its input.
"""

from __future__ import annotations

from typing import Any, List

from .base import Compare, natural_compare

NAME = "merge_stable"
STABLE = True

# Runs shorter than this are insertion sorted before merging.
MIN_RUN = 24


def sort(v: List[Any]) -> None:
    sort_by(v, natural_compare)


def sort_by(v: List[Any], compare: Compare) -> None:
    n = len(v)
    if n < 2:
        return

    for lo in range(0, n, MIN_RUN):
        _insertion_sort(v, lo, min(lo + MIN_RUN, n), compare)

    width = MIN_RUN
    while width < n:
        for lo in range(0, n - width, 2 * width):
            mid = lo + width
            hi = min(lo + 2 * width, n)
            # Already in order across the seam: nothing to merge.
            if compare(v[mid], v[mid - 1]) < 0:
                _merge_lo(v, lo, mid, hi, compare)
        width *= 2


def _insertion_sort(v: List[Any], lo: int, hi: int, compare: Compare) -> None:
    for i in range(lo + 1, hi):
        item = v[i]
        j = i
        try:
            # Strict "<" keeps equal elements in input order.
            while j > lo and compare(item, v[j - 1]) < 0:
                v[j] = v[j - 1]
                j -= 1
        finally:
            v[j] = item


def _merge_lo(v: List[Any], lo: int, mid: int, hi: int, compare: Compare) -> None:
    buf = v[lo:mid]
    i = 0
    j = mid
    k = lo
    try:
        while i < len(buf) and j < hi:
            # Take from the right run only when strictly smaller.
            if compare(v[j], buf[i]) < 0:
                v[k] = v[j]
                j += 1
            else:
                v[k] = buf[i]
                i += 1
            k += 1
    finally:
        # Invariant: j - k == len(buf) - i.
        v[k:j] = buf[i:]
