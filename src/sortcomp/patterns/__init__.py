"""
Patterns package public API.

Re-export the pattern generators so callers can write:
    from sortcomp.patterns import SeedState, PatternGenerator, make_pattern
"""

from .catalog import BENCH_PATTERNS, pattern_provider
from .generators import (
    INT32_MAX,
    INT32_MIN,
    SUPPORTED_PATTERNS,
    PatternGenerator,
    RandomnessError,
    ensure_true_random,
    make_pattern,
)
from .seed import DEFAULT_SEED, SeedState, SeedStateError

__all__ = [
    "BENCH_PATTERNS",
    "pattern_provider",
    "INT32_MAX",
    "INT32_MIN",
    "SUPPORTED_PATTERNS",
    "PatternGenerator",
    "RandomnessError",
    "ensure_true_random",
    "make_pattern",
    "DEFAULT_SEED",
    "SeedState",
    "SeedStateError",
]
