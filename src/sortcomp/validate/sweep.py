"""
Differential sweep: every scenario x every test size, reference vs candidate.

Usage (from repo root):
    python -m sortcomp.validate.sweep --candidate merge_stable
    sortcomp-check --candidate merge_stable --scenario random_duplicates

Set SORTCOMP_FULL_MATRIX=1 to add the 100_000 and 1_000_000 sizes.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from rich.console import Console
from tqdm import tqdm

from ..algorithms import REFERENCE_ALGORITHM, load_algorithm
from ..patterns.generators import PatternGenerator
from ..patterns.seed import SeedState
from ..values.transforms import (
    keyed_records,
    transform_dyn,
    transform_large_val,
)
from .differential import DifferentialResult, compare

Builder = Callable[[PatternGenerator, int], List[Any]]

TEST_SIZES: Tuple[int, ...] = (
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 15, 16, 17, 20, 24, 30, 32, 33, 35, 50, 100, 200,
    500, 1_000, 2_048, 10_000,
)
LARGE_TEST_SIZES: Tuple[int, ...] = (100_000, 1_000_000)

__all__ = ["TEST_SIZES", "LARGE_TEST_SIZES", "SCENARIOS", "active_sizes", "run_pattern", "run_all", "main"]

logger = logging.getLogger(__name__)


def active_sizes() -> Tuple[int, ...]:
    if os.environ.get("SORTCOMP_FULL_MATRIX"):
        return TEST_SIZES + LARGE_TEST_SIZES
    return TEST_SIZES


def _random_duplicates(g: PatternGenerator, size: int) -> List[Any]:
    # Few distinct keys, random tags: the stability stress case.
    extras = g.random(size)
    keys = g.random_uniform(size, 0, max(size // 10, 1))
    return keyed_records(keys, extras)


SCENARIOS: Dict[str, Builder] = {
    "random": lambda g, size: g.random(size),
    "all_equal": lambda g, size: g.all_equal(size),
    "ascending": lambda g, size: g.ascending(size),
    "descending": lambda g, size: g.descending(size),
    "ascending_saw_5": lambda g, size: g.ascending_saw(size, size // 5),
    "ascending_saw_20": lambda g, size: g.ascending_saw(size, size // 20),
    "descending_saw_5": lambda g, size: g.descending_saw(size, size // 5),
    "descending_saw_20": lambda g, size: g.descending_saw(size, size // 20),
    "pipe_organ": lambda g, size: g.pipe_organ(size),
    "random_duplicates": _random_duplicates,
    "random_str": lambda g, size: [str(v) for v in g.random(size)],
    "random_large_val": lambda g, size: transform_large_val(g.random(size)),
    "dyn_val": lambda g, size: transform_dyn(g.random(size)),
}


def run_pattern(
    reference: Any,
    candidate: Any,
    build: Builder,
    *,
    generator: PatternGenerator,
    sizes: Optional[Iterable[int]] = None,
    artifact_dir: Path = Path("."),
) -> List[DifferentialResult]:
    """Compare reference and candidate once per size on `build(generator, size)`."""
    results = []
    for size in active_sizes() if sizes is None else sizes:
        data = build(generator, size)
        results.append(
            compare(reference, candidate, data, seed_state=generator.seed_state, artifact_dir=artifact_dir)
        )
    return results


def run_all(
    candidate_name: str,
    *,
    reference_name: str = REFERENCE_ALGORITHM,
    scenarios: Optional[Sequence[str]] = None,
    seed_state: Optional[SeedState] = None,
    artifact_dir: Path = Path("."),
) -> int:
    """Run the named scenarios (all by default); returns the number of comparisons made."""
    reference = load_algorithm(reference_name)
    candidate = load_algorithm(candidate_name)
    generator = PatternGenerator(seed_state or SeedState())
    names = list(SCENARIOS) if not scenarios else list(scenarios)
    unknown = [n for n in names if n not in SCENARIOS]
    if unknown:
        raise ValueError(f"Unknown scenarios: {unknown}. Known: {sorted(SCENARIOS)}")

    total = 0
    for name in tqdm(names, desc="Scenarios", unit="scenario"):
        results = run_pattern(reference, candidate, SCENARIOS[name], generator=generator, artifact_dir=artifact_dir)
        logger.info("%s: %d sizes match", name, len(results))
        total += len(results)
    return total


# ------------------------- CLI ------------------------- #

def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Differentially test a sort implementation against the reference.")
    p.add_argument("--candidate", default="merge_stable", help="Algorithm module under sortcomp.algorithms")
    p.add_argument("--reference", default=REFERENCE_ALGORITHM, help="Reference algorithm module")
    p.add_argument("--scenario", action="append", dest="scenarios", help="Scenario to run (repeatable)")
    p.add_argument("--seed", type=int, default=None, help="Fixed seed (default: built-in seed)")
    p.add_argument("--artifact-dir", default=".", help="Where large-input mismatch dumps go")
    return p.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = _parse_args()
    console = Console()
    seed_state = SeedState() if args.seed is None else SeedState(args.seed)
    try:
        total = run_all(
            args.candidate,
            reference_name=args.reference,
            scenarios=args.scenarios,
            seed_state=seed_state,
            artifact_dir=Path(args.artifact_dir),
        )
    except AssertionError as e:
        console.print(f"[bold red]Differential check failed:[/bold red] {e}")
        raise SystemExit(1) from e
    console.print(f"[bold green]OK[/bold green] {total} comparisons matched (seed {seed_state.current_seed})")


if __name__ == "__main__":
    main()
