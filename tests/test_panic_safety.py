"""
Panic-safety stress tests.

The sorts must keep owning every value exactly once when the comparator
raises midway; `verify_ownership` plays the external checker.
"""

from __future__ import annotations

from typing import Any, List

import pytest

from sortcomp.algorithms import STABLE_ALGORITHMS, load_algorithm
from sortcomp.patterns import INT32_MAX, PatternGenerator, SeedState
from sortcomp.validate import ComparatorInterrupt, OwnershipViolation, stress, verify_ownership
from sortcomp.validate.panic_safety import interrupt_threshold, interrupting_compare
from sortcomp.validate.sweep import TEST_SIZES


def _duplicating_sort_by(v: List[Any], compare) -> None:
    # Overwrites a slot before comparing, the classic lost-element bug.
    if len(v) > 1:
        v[1] = v[0]
    for i in range(len(v) - 1):
        compare(v[i], v[i + 1])


@pytest.mark.parametrize("name", STABLE_ALGORITHMS + ("heap_unstable",))
def test_stress_keeps_ownership(generator: PatternGenerator, name: str) -> None:
    outcomes = stress(load_algorithm(name).sort_by, generator=generator, sizes=TEST_SIZES)

    assert [o.size for o in outcomes] == list(TEST_SIZES)
    # Nothing to compare at sizes 0 and 1.
    assert not outcomes[0].interrupted
    assert not outcomes[1].interrupted
    for o in outcomes:
        if o.interrupted:
            assert f"size: {o.size}" in o.message


def test_interrupt_fires_for_some_runs_but_not_all() -> None:
    sizes = [s for s in TEST_SIZES if 2 <= s <= 2_048]
    interrupted, completed = 0, 0
    for seed in range(20):
        generator = PatternGenerator(SeedState(seed))
        for o in stress(load_algorithm("merge_stable").sort_by, generator=generator, sizes=sizes):
            if o.interrupted:
                interrupted += 1
            else:
                completed += 1
    assert interrupted > 0
    assert completed > 0


def test_broken_sort_is_caught_by_verifier(generator: PatternGenerator) -> None:
    with pytest.raises(OwnershipViolation):
        stress(_duplicating_sort_by, generator=generator, sizes=[50])


def test_custom_verifier_receives_before_and_after(generator: PatternGenerator) -> None:
    seen = []

    def verifier(before, after) -> None:
        seen.append((len(before), len(after)))
        verify_ownership(before, after)

    stress(load_algorithm("merge_stable").sort_by, generator=generator, sizes=[0, 10, 100], verifier=verifier)
    assert seen == [(0, 0), (10, 10), (100, 100)]


def test_interrupting_compare_threshold() -> None:
    assert interrupt_threshold(0) == INT32_MAX
    assert interrupt_threshold(1_000) == INT32_MAX // 1_000
    cmp = interrupting_compare(1_000, seed=7)
    assert cmp([INT32_MAX, 0, 0], [1, 1, 1]) == 1
    assert cmp([-INT32_MAX, 0, 0], [1, 1, 1]) == -1
    with pytest.raises(ComparatorInterrupt, match="Seed: 7"):
        cmp([5, 5, 5], [INT32_MAX, 0, 0])


@pytest.mark.parametrize("stop_at", [1, 2_000, 4_500])
def test_merge_stable_restores_permutation_after_interrupt(generator: PatternGenerator, stop_at: int) -> None:
    # 500 random values take roughly 3_500 comparisons of insertion sorting
    # before the merges start.
    values = [[v, v, v] for v in generator.random(500)]
    before = list(values)
    calls = 0

    def compare(a, b) -> int:
        nonlocal calls
        calls += 1
        if calls == stop_at:
            raise ComparatorInterrupt("stop")
        return (a[0] > b[0]) - (a[0] < b[0])

    with pytest.raises(ComparatorInterrupt):
        load_algorithm("merge_stable").sort_by(values, compare)
    verify_ownership(before, values)
