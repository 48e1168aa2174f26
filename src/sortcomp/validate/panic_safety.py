"""
Panic-safety stress test.

The comparator handed to the sort raises `ComparatorInterrupt` once it sees an
element whose magnitude falls below `INT32_MAX // size`. With uniformly random
i32 inputs that happens after a size-dependent, unpredictable number of
comparisons, so across the size matrix the interrupt lands at many different
points of a sort's progress.

The interrupt is caught right around the sort call. Whether the values end up
ordered is not checked: what matters is that the list still owns every value
exactly once. That verdict belongs to the `verifier` collaborator
(`verify_ownership` by default), which compares the objects before and after.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..algorithms.base import Compare
from ..patterns.generators import INT32_MAX, PatternGenerator
from .properties import same_objects

__all__ = [
    "ComparatorInterrupt",
    "OwnershipViolation",
    "StressOutcome",
    "interrupt_threshold",
    "interrupting_compare",
    "verify_ownership",
    "stress",
]

logger = logging.getLogger(__name__)

Verifier = Callable[[Sequence[Any], Sequence[Any]], None]


class ComparatorInterrupt(Exception):
    """Raised from inside a comparator to abandon a sort midway."""


class OwnershipViolation(AssertionError):
    """A container lost or duplicated a value across an interrupted sort."""


@dataclass(frozen=True)
class StressOutcome:
    size: int
    interrupted: bool
    message: Optional[str] = None


def interrupt_threshold(size: int) -> int:
    return INT32_MAX // max(size, 1)


def interrupting_compare(size: int, seed: int) -> Compare:
    threshold = interrupt_threshold(size)

    def compare(a: List[int], b: List[int]) -> int:
        if abs(a[0]) < threshold:
            raise ComparatorInterrupt(
                f"Explicit interrupt. Seed: {seed}. size: {size}. a: {a[0]} b: {b[0]}"
            )
        return (a[0] > b[0]) - (a[0] < b[0])

    return compare


def verify_ownership(before: Sequence[Any], after: Sequence[Any]) -> None:
    """Raise OwnershipViolation unless `after` holds exactly the objects of `before`."""
    if not same_objects(before, after):
        raise OwnershipViolation(
            f"container ownership broken: {len(before)} values before, {len(after)} after, "
            "with duplicated or dropped objects"
        )


def stress(
    sort_by: Callable[[List[Any], Compare], None],
    *,
    generator: PatternGenerator,
    sizes: Iterable[int],
    verifier: Verifier = verify_ownership,
) -> List[StressOutcome]:
    """
    Run `sort_by` once per size with an interrupting comparator.

    Values are heap-backed `[v, v, v]` lists, so a duplicated or lost element
    is a distinct object the verifier can spot. Returns one outcome per size.
    """
    seed = generator.current_seed
    outcomes: List[StressOutcome] = []
    for size in sizes:
        values = [[v, v, v] for v in generator.random(size)]
        before = list(values)
        message: Optional[str] = None
        try:
            sort_by(values, interrupting_compare(size, seed))
        except ComparatorInterrupt as e:
            message = str(e)
            logger.debug("size %d interrupted: %s", size, message)
        verifier(before, values)
        outcomes.append(StressOutcome(size=size, interrupted=message is not None, message=message))
    return outcomes
