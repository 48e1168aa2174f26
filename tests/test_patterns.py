"""
Pattern generators and the seed-state lifecycle.
"""

from __future__ import annotations

import pytest

from sortcomp.patterns import (
    BENCH_PATTERNS,
    DEFAULT_SEED,
    INT32_MAX,
    INT32_MIN,
    SUPPORTED_PATTERNS,
    PatternGenerator,
    RandomnessError,
    SeedState,
    SeedStateError,
    ensure_true_random,
    make_pattern,
    pattern_provider,
)


# ------------------------- seed state ------------------------- #

def test_seed_state_starts_fixed() -> None:
    state = SeedState()
    assert state.is_fixed
    assert state.current_seed == DEFAULT_SEED


def test_fixed_seed_is_deterministic(generator: PatternGenerator) -> None:
    assert generator.random(1_000) == generator.random(1_000)
    assert generator.random_dense(500) == generator.random_dense(500)
    assert PatternGenerator(SeedState(5)).random(50) == PatternGenerator(SeedState(5)).random(50)
    assert PatternGenerator(SeedState(5)).random(50) != PatternGenerator(SeedState(6)).random(50)


def test_disable_fixed_seed_makes_generation_random(seed_state: SeedState, generator: PatternGenerator) -> None:
    new_seed = seed_state.disable_fixed_seed()
    assert not seed_state.is_fixed
    assert seed_state.current_seed == new_seed
    assert generator.random(5) != generator.random(5)
    ensure_true_random(generator)


def test_rng_switches_from_fresh_to_persistent(seed_state: SeedState) -> None:
    assert seed_state.rng() is not seed_state.rng()
    assert "mode=fixed" in repr(seed_state)
    seed_state.disable_fixed_seed()
    assert seed_state.rng() is seed_state.rng()
    assert "mode=random" in repr(seed_state)


def test_disable_fixed_seed_only_once(seed_state: SeedState) -> None:
    seed_state.disable_fixed_seed()
    with pytest.raises(SeedStateError):
        seed_state.disable_fixed_seed()


def test_true_random_check_fails_with_fixed_seed(generator: PatternGenerator) -> None:
    with pytest.raises(RandomnessError):
        ensure_true_random(generator)


def test_invalid_seed() -> None:
    with pytest.raises(ValueError):
        SeedState(-1)


# ------------------------- pattern shapes ------------------------- #

def test_random_stays_in_i32(generator: PatternGenerator) -> None:
    out = generator.random(2_000)
    assert len(out) == 2_000
    assert all(INT32_MIN <= v <= INT32_MAX for v in out)
    assert len(set(out)) > 1_900


def test_random_uniform_half_open(generator: PatternGenerator) -> None:
    out = generator.random_uniform(1_000, 3, 6)
    assert set(out) == {3, 4, 5}
    with pytest.raises(ValueError):
        generator.random_uniform(10, 4, 4)


def test_dense_and_binary(generator: PatternGenerator) -> None:
    assert set(generator.random_binary(500)) == {0, 1}
    dense = generator.random_dense(1_024)
    assert set(dense) <= set(range(10))
    assert generator.random_dense(1) == [0]


def test_random_random_size(generator: PatternGenerator) -> None:
    assert generator.random_random_size(0) == []
    assert len(generator.random_random_size(100)) < 100


def test_deterministic_shapes(generator: PatternGenerator) -> None:
    assert generator.ascending(5) == [0, 1, 2, 3, 4]
    assert generator.descending(5) == [4, 3, 2, 1, 0]
    assert generator.all_equal(3) == [66, 66, 66]
    assert generator.ascending_saw(7, 3) == [0, 1, 2, 0, 1, 2, 0]
    assert generator.descending_saw(7, 3) == [2, 1, 0, 2, 1, 0, 2]
    assert generator.pipe_organ(6) == [0, 1, 2, 2, 1, 0]
    assert generator.pipe_organ(5) == [0, 1, 2, 1, 0]


def test_saw_with_zero_period_is_one_run(generator: PatternGenerator) -> None:
    assert generator.ascending_saw(4, 0) == [0, 1, 2, 3]
    assert generator.descending_saw(4, 0) == [3, 2, 1, 0]


@pytest.mark.parametrize("name", sorted(SUPPORTED_PATTERNS - {"random_uniform"}))
def test_every_pattern_handles_empty(generator: PatternGenerator, name: str) -> None:
    assert make_pattern(0, {"pattern": name}, generator) == []


def test_negative_size_rejected(generator: PatternGenerator) -> None:
    with pytest.raises(ValueError):
        generator.ascending(-1)


# ------------------------- make_pattern ------------------------- #

def test_make_pattern_dispatch(generator: PatternGenerator) -> None:
    assert make_pattern(4, {"pattern": "descending"}, generator) == [3, 2, 1, 0]
    assert make_pattern(10, {"pattern": "ascending_saw", "params": {"divisor": 5}}, generator) == [0, 1] * 5
    assert make_pattern(6, {"pattern": "descending_saw", "params": {"period": 3}}, generator) == [2, 1, 0, 2, 1, 0]
    uni = make_pattern(200, {"pattern": "random_uniform", "params": {"range": [-1, 1]}}, generator)
    assert set(uni) == {-1, 0, 1}


def test_make_pattern_is_pure_under_fixed_seed(generator: PatternGenerator) -> None:
    spec = {"pattern": "random_uniform", "params": {"range": [0, 99]}}
    assert make_pattern(300, spec, generator) == make_pattern(300, spec, generator)


@pytest.mark.parametrize(
    "spec",
    [
        "random",
        {"pattern": "gaussian"},
        {"pattern": "random_uniform"},
        {"pattern": "random_uniform", "params": {"range": [5, 1]}},
        {"pattern": "random_uniform", "params": {"range": [0.5, 1]}},
        {"pattern": "ascending_saw", "params": {"divisor": 0}},
        {"pattern": "ascending_saw", "params": {"period": "3"}},
    ],
)
def test_make_pattern_rejects_bad_specs(generator: PatternGenerator, spec) -> None:
    with pytest.raises(ValueError):
        make_pattern(10, spec, generator)


# ------------------------- bench catalog ------------------------- #

def test_bench_catalog(generator: PatternGenerator) -> None:
    names = [name for name, _ in BENCH_PATTERNS]
    assert names[0] == "random"
    assert len(names) == len(set(names)) == 11
    assert pattern_provider("ascending_saw_20")(generator, 40) == [0, 1] * 20
    with pytest.raises(ValueError):
        pattern_provider("nope")
