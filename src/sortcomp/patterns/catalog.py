"""
Named pattern providers used by the benchmark runner.

Each entry is (name, provider) where provider(generator, size) -> list[int].
The "_5" / "_20" saw variants restart every size // 5 and size // 20 elements.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from .generators import PatternGenerator

PatternProvider = Callable[[PatternGenerator, int], List[int]]

BENCH_PATTERNS: List[Tuple[str, PatternProvider]] = [
    ("random", lambda g, size: g.random(size)),
    ("random_dense", lambda g, size: g.random_dense(size)),
    ("random_binary", lambda g, size: g.random_binary(size)),
    ("random_random_size", lambda g, size: g.random_random_size(size)),
    ("ascending", lambda g, size: g.ascending(size)),
    ("descending", lambda g, size: g.descending(size)),
    ("ascending_saw_5", lambda g, size: g.ascending_saw(size, size // 5)),
    ("ascending_saw_20", lambda g, size: g.ascending_saw(size, size // 20)),
    ("descending_saw_5", lambda g, size: g.descending_saw(size, size // 5)),
    ("descending_saw_20", lambda g, size: g.descending_saw(size, size // 20)),
    ("pipe_organ", lambda g, size: g.pipe_organ(size)),
]

__all__ = ["PatternProvider", "BENCH_PATTERNS", "pattern_provider"]


def pattern_provider(name: str) -> PatternProvider:
    table: Dict[str, PatternProvider] = dict(BENCH_PATTERNS)
    if name not in table:
        raise ValueError(f"Unknown bench pattern: {name!r}. Known: {[n for n, _ in BENCH_PATTERNS]}")
    return table[name]
