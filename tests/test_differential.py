"""
Differential tests: merge_stable against the stdlib reference over every
scenario and size, plus the failure reporting paths of the tester itself.
"""

from __future__ import annotations

import logging
from functools import cmp_to_key
from types import SimpleNamespace
from typing import Any, List

import pytest

from sortcomp.algorithms import load_algorithm
from sortcomp.patterns import PatternGenerator, SeedState
from sortcomp.validate import DifferentialMismatch, LengthMismatch, assert_no_mutation, compare
from sortcomp.validate.sweep import SCENARIOS, TEST_SIZES, run_all, run_pattern
from sortcomp.values import TRANSFORMS, keyed_records, transform_unit

reference = load_algorithm("stdlib_stable")
candidate = load_algorithm("merge_stable")


# ------------------------- broken candidates ------------------------- #

def _reverse_ties(v: List[Any], compare_fn) -> None:
    # Sorted, but equal keys come out in reverse input order.
    v.reverse()
    v.sort(key=cmp_to_key(compare_fn))


def _drop_last(v: List[Any], compare_fn) -> None:
    v.sort(key=cmp_to_key(compare_fn))
    if v:
        v.pop()


def _swap_ends(v: List[Any], compare_fn) -> None:
    v.sort(key=cmp_to_key(compare_fn))
    if len(v) > 1:
        v[0], v[-1] = v[-1], v[0]


unstable = SimpleNamespace(NAME="reverse_ties", sort_by=_reverse_ties)
lossy = SimpleNamespace(NAME="lossy", sort_by=_drop_last)
wrong = SimpleNamespace(NAME="wrong", sort_by=_swap_ends)


# ------------------------- concrete scenarios ------------------------- #

def test_basic_input(seed_state: SeedState) -> None:
    data = [15, -1, 3, -1, -3, -1, 7]
    result = compare(reference, candidate, data, seed_state=seed_state)
    assert result.length == 7
    assert_no_mutation([15, -1, 3, -1, -3, -1, 7], data)

    out = list(data)
    candidate.sort(out)
    assert out == [-3, -1, -1, -1, 3, 7, 15]


@pytest.mark.parametrize(
    "data",
    [[2, 3], [2, 3, 6], [2, 3, 99, 6], [2, 7709, 400, 90932], [()], [(), ()], [(), (), ()]],
)
def test_small_inputs(seed_state: SeedState, data: List[Any]) -> None:
    compare(reference, candidate, data, seed_state=seed_state)


@pytest.mark.parametrize("name", sorted(TRANSFORMS))
def test_empty_input_every_type(seed_state: SeedState, name: str) -> None:
    for algo in (reference, candidate, load_algorithm("heap_unstable")):
        out = TRANSFORMS[name]([])
        algo.sort(out)
        assert out == []
    assert compare(reference, candidate, TRANSFORMS[name]([]), seed_state=seed_state).length == 0
    assert compare(reference, candidate, transform_unit([]), seed_state=seed_state).length == 0


def test_stability_under_heavy_collisions(generator: PatternGenerator) -> None:
    size = 100_000
    keys = generator.random_uniform(size, 0, size // 10)
    extras = generator.random(size)
    data = keyed_records(keys, extras)
    assert compare(reference, candidate, data, seed_state=generator.seed_state).length == size


# ------------------------- sweep over scenarios ------------------------- #

@pytest.mark.parametrize("scenario", sorted(SCENARIOS))
def test_scenario(generator: PatternGenerator, scenario: str) -> None:
    results = run_pattern(reference, candidate, SCENARIOS[scenario], generator=generator, sizes=TEST_SIZES)
    assert len(results) == len(TEST_SIZES)
    assert {r.candidate for r in results} == {"merge_stable"}


def test_run_all_subset(tmp_path) -> None:
    total = run_all("merge_stable", scenarios=["random", "pipe_organ"], artifact_dir=tmp_path)
    assert total == 2 * len(TEST_SIZES)


def test_run_all_unknown_scenario() -> None:
    with pytest.raises(ValueError):
        run_all("merge_stable", scenarios=["bogus"])


# ------------------------- failure reporting ------------------------- #

def test_unstable_candidate_fails_small_input_inline(seed_state: SeedState, tmp_path, caplog) -> None:
    data = keyed_records([1, 1, 0], [10, 20, 30])
    with caplog.at_level(logging.ERROR, logger="sortcomp.validate.differential"):
        with pytest.raises(DifferentialMismatch) as exc:
            compare(reference, unstable, data, seed_state=seed_state, artifact_dir=tmp_path)
    assert exc.value.index == 1
    assert exc.value.seed == seed_state.current_seed
    assert exc.value.artifacts == []
    assert f"Seed: {seed_state.current_seed}" in caplog.text
    assert "Original:" in caplog.text and "Expected:" in caplog.text and "Got:" in caplog.text
    assert list(tmp_path.iterdir()) == []


def test_wrong_candidate_fails_large_input_with_artifacts(generator: PatternGenerator, tmp_path) -> None:
    data = generator.random(101)
    seed = generator.current_seed
    with pytest.raises(DifferentialMismatch) as exc:
        compare(reference, wrong, data, seed_state=generator.seed_state, artifact_dir=tmp_path)

    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == sorted(
        [f"original_{seed}.txt", f"stdlib_stable_sorted_{seed}.txt", f"wrong_sorted_{seed}.txt"]
    )
    assert exc.value.index == 0
    assert (tmp_path / f"original_{seed}.txt").read_text(encoding="utf-8") == repr(data)
    assert (tmp_path / f"stdlib_stable_sorted_{seed}.txt").read_text(encoding="utf-8") == repr(sorted(data))


def test_threshold_boundary_is_inline(generator: PatternGenerator, tmp_path) -> None:
    with pytest.raises(DifferentialMismatch):
        compare(reference, wrong, generator.random(100), seed_state=generator.seed_state, artifact_dir=tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_length_mismatch_is_distinct(seed_state: SeedState) -> None:
    with pytest.raises(LengthMismatch):
        compare(reference, lossy, [3, 1, 2], seed_state=seed_state)


def test_explicit_comparator_reaches_both_sorts(seed_state: SeedState) -> None:
    data = keyed_records([3, 1, 3, 2, 1], [0, 1, 2, 3, 4])

    def descending(a: Any, b: Any) -> int:
        return (b.key > a.key) - (b.key < a.key)

    assert compare(reference, candidate, data, seed_state=seed_state, compare_fn=descending).length == 5

    with pytest.raises(DifferentialMismatch) as exc:
        compare(reference, unstable, data, seed_state=seed_state, compare_fn=descending)
    assert exc.value.index == 0


def test_assert_no_mutation_reports_first_difference() -> None:
    assert_no_mutation([1, 2, 3], [1, 2, 3])
    with pytest.raises(AssertionError, match="index 1"):
        assert_no_mutation([1, 2, 3], [1, 5, 3])
    with pytest.raises(AssertionError, match="length changed"):
        assert_no_mutation([1, 2], [1])


def test_random_str_scenario_keeps_sign(generator: PatternGenerator) -> None:
    ints = generator.random(200)
    strs = SCENARIOS["random_str"](generator, 200)
    assert strs == [str(v) for v in ints]
    assert any(s.startswith("-") for s in strs)
