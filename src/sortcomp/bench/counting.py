"""
Comparison-count instrumentation.

An alternative to wall-clock timing: wrap the natural comparator so every call
bumps a shared counter, run a fixed number of sorts through `sort_by`, and
report the mean number of comparisons per sort.

Going through `sort_by` rather than `sort` keeps the sorted element type
unchanged, so counts stay representative of the uninstrumented path.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from ..algorithms.base import Compare, natural_compare

SMALL_RUN_COUNT = 500
LARGE_RUN_COUNT = 50
RUN_COUNT_THRESHOLD = 10_000

__all__ = [
    "ComparisonCounter",
    "counting_compare",
    "comparison_run_count",
    "measure_comp_count",
]

logger = logging.getLogger(__name__)


class ComparisonCounter:
    """
    Counter shared between an instrumented comparator and the measurement loop.

    The harness drives sorts from one thread, but a candidate may compare from
    several; all access goes through one lock so `load()` after a batch sees
    every increment.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0

    def increment(self) -> None:
        with self._lock:
            self._count += 1

    def reset(self) -> None:
        with self._lock:
            self._count = 0

    def load(self) -> int:
        with self._lock:
            return self._count


def counting_compare(counter: ComparisonCounter, compare: Optional[Compare] = None) -> Compare:
    inner = natural_compare if compare is None else compare

    def counted(a: Any, b: Any) -> int:
        counter.increment()
        return inner(a, b)

    return counted


def comparison_run_count(size: int) -> int:
    return SMALL_RUN_COUNT if size < RUN_COUNT_THRESHOLD else LARGE_RUN_COUNT


def measure_comp_count(
    name: str,
    size: int,
    instrumented: Callable[[], Any],
    counter: ComparisonCounter,
) -> int:
    """
    Call `instrumented()` `comparison_run_count(size)` times and return the
    mean comparisons per call (integer division; below one comparison per
    call this reports 0).
    """
    run_count = comparison_run_count(size)
    counter.reset()
    for _ in range(run_count):
        instrumented()
    mean = counter.load() // run_count
    logger.info("%s: mean comparisons: %d", name, mean)
    return mean
