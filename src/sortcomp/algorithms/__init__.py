"""
Sort implementations under test.

Each module satisfies the contract in `sortcomp.algorithms.base`; resolve
them by name with `load_algorithm`.
"""

from .base import Compare, load_algorithm, natural_compare

REFERENCE_ALGORITHM = "stdlib_stable"
STABLE_ALGORITHMS = ("stdlib_stable", "merge_stable")
ALL_ALGORITHMS = ("stdlib_stable", "merge_stable", "heap_unstable")

__all__ = [
    "Compare",
    "load_algorithm",
    "natural_compare",
    "REFERENCE_ALGORITHM",
    "STABLE_ALGORITHMS",
    "ALL_ALGORITHMS",
]
