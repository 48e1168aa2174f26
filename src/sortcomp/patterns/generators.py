"""
Input pattern generators for sort testing and benchmarking.

Every pattern yields a `list[int]` of signed 32-bit values. Random patterns
draw from the `SeedState` the generator is bound to; deterministic patterns
ignore it.

Currently implemented:
- "random":             uniform over the whole i32 range.
- "random_uniform":     uniform over an inclusive [min, max] range.
- "random_dense":       uniform over [0, round(log2(n))), lots of duplicates.
- "random_binary":      only 0 and 1.
- "random_random_size": random values, random length in [0, n).
- "all_equal":          n copies of one value.
- "ascending":          [0, 1, ..., n-1].
- "descending":         [n-1, ..., 0].
- "ascending_saw":      ascending runs that restart every `period` elements.
- "descending_saw":     descending analog of "ascending_saw".
- "pipe_organ":         ascending first half, descending second half.

Public API (stable):
    PatternGenerator(seed_state)
    make_pattern(n: int, spec: dict, generator: PatternGenerator) -> list[int]
    ensure_true_random(generator) -> None

Conventions:
- For "random_uniform", params["range"] is **inclusive** on both ends.
- For the saws, either params["period"] (elements per run) or
  params["divisor"] (period = n // divisor) may be given. A period <= 0
  degrades to a single run over the whole input.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Tuple

import numpy as np

from .seed import SeedState

INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1

SUPPORTED_PATTERNS = {
    "random",
    "random_uniform",
    "random_dense",
    "random_binary",
    "random_random_size",
    "all_equal",
    "ascending",
    "descending",
    "ascending_saw",
    "descending_saw",
    "pipe_organ",
}
__all__ = [
    "INT32_MIN",
    "INT32_MAX",
    "SUPPORTED_PATTERNS",
    "PatternGenerator",
    "RandomnessError",
    "make_pattern",
    "ensure_true_random",
]


class RandomnessError(RuntimeError):
    """Random generation produced identical data twice in non-fixed mode."""


class PatternGenerator:
    """Pattern functions bound to one SeedState."""

    def __init__(self, seed_state: SeedState) -> None:
        self.seed_state = seed_state

    @property
    def current_seed(self) -> int:
        return self.seed_state.current_seed

    # ---- random patterns ----

    def random(self, size: int) -> List[int]:
        return self.random_uniform(size, INT32_MIN, INT32_MAX + 1)

    def random_uniform(self, size: int, lo: int, hi: int) -> List[int]:
        """Uniform values in the half-open range [lo, hi)."""
        _validate_n(size)
        if lo >= hi:
            raise ValueError(f"random_uniform range is empty: [{lo}, {hi})")
        if size == 0:
            return []
        arr = self.seed_state.rng().integers(lo, hi, size=size, dtype=np.int64)
        return arr.tolist()

    def random_dense(self, size: int) -> List[int]:
        _validate_n(size)
        upper = int(round(math.log2(size))) if size > 0 else 0
        return self.random_uniform(size, 0, max(upper, 1))

    def random_binary(self, size: int) -> List[int]:
        return self.random_uniform(size, 0, 2)

    def random_random_size(self, size: int) -> List[int]:
        _validate_n(size)
        if size == 0:
            return []
        length = int(self.seed_state.rng().integers(0, size))
        return self.random(length)

    # ---- deterministic patterns ----

    def all_equal(self, size: int) -> List[int]:
        _validate_n(size)
        return [66] * size

    def ascending(self, size: int) -> List[int]:
        _validate_n(size)
        return list(range(size))

    def descending(self, size: int) -> List[int]:
        _validate_n(size)
        return list(range(size - 1, -1, -1))

    def ascending_saw(self, size: int, period: int) -> List[int]:
        _validate_n(size)
        period = period if period > 0 else max(size, 1)
        return [i % period for i in range(size)]

    def descending_saw(self, size: int, period: int) -> List[int]:
        _validate_n(size)
        period = period if period > 0 else max(size, 1)
        return [period - 1 - (i % period) for i in range(size)]

    def pipe_organ(self, size: int) -> List[int]:
        _validate_n(size)
        half = size // 2
        return list(range(half)) + list(range(size - half - 1, -1, -1))


def make_pattern(n: int, spec: Dict[str, Any], generator: PatternGenerator) -> List[int]:
    """
    Generate an integer pattern according to `spec`.

    Parameters
    ----------
    n : int
        Number of elements to generate (upper bound for "random_random_size").
    spec : dict
        Pattern specification, e.g.

            {"pattern": "random"}
            {"pattern": "random_uniform", "params": {"range": [0, 9]}}
            {"pattern": "ascending_saw", "params": {"divisor": 5}}

    generator : PatternGenerator
        Generator whose SeedState supplies randomness.

    Returns
    -------
    list[int]

    Raises
    ------
    ValueError
        If inputs are invalid or if the pattern is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    pattern = spec.get("pattern", None)
    if pattern not in SUPPORTED_PATTERNS:
        raise ValueError(
            f"Unsupported pattern: {pattern!r}. Supported: {sorted(SUPPORTED_PATTERNS)}"
        )

    params = spec.get("params", None) or {}
    if not isinstance(params, dict):
        raise ValueError(f"{pattern}.params must be a dict")

    if pattern == "random_uniform":
        lo, hi = _parse_inclusive_range(params)
        return generator.random_uniform(n, lo, hi + 1)

    if pattern in ("ascending_saw", "descending_saw"):
        period = _parse_period(n, params)
        return getattr(generator, pattern)(n, period)

    return getattr(generator, pattern)(n)


def ensure_true_random(generator: PatternGenerator) -> None:
    """Check that two random draws differ; only meaningful after disable_fixed_seed()."""
    a = generator.random(5)
    b = generator.random(5)
    if a == b:
        raise RandomnessError(
            f"random patterns are not random (seed {generator.current_seed}): {a!r}"
        )


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not _is_int_like(n):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_inclusive_range(params: Dict[str, Any]) -> Tuple[int, int]:
    """
    Validate and parse the inclusive integer range from params (REQUIRED).

    Expected:
        params["range"] == [min_int, max_int]  (both inclusive)
    """
    if "range" not in params:
        raise ValueError(
            "random_uniform.params.range must be provided as [min, max] (inclusive)"
        )

    rng_spec = params["range"]
    if not isinstance(rng_spec, (list, tuple)) or len(rng_spec) != 2:
        raise ValueError("random_uniform.params.range must be a 2-element list/tuple [min, max]")

    lo_raw, hi_raw = rng_spec[0], rng_spec[1]
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("random_uniform.params.range values must be integers")

    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"random_uniform.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_period(n: int, params: Dict[str, Any]) -> int:
    """Saw period from params["period"], or n // params["divisor"]."""
    if "period" in params:
        period = params["period"]
        if not _is_int_like(period):
            raise ValueError(f"saw.params.period must be an integer; got {period!r}")
        return int(period)
    divisor = params.get("divisor", 5)
    if not _is_int_like(divisor) or divisor < 1:
        raise ValueError(f"saw.params.divisor must be an integer >= 1; got {divisor!r}")
    return n // int(divisor)


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types, but not bools
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
