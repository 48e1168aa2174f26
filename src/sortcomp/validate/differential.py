"""
Differential tester: run a reference and a candidate sort on the same input
and require deep-equal results at every position.

Because deep equality also compares non-key fields, a candidate that sorts
correctly but reorders equal keys fails here just like a wrong sort does.

On a mismatch the inputs are reported before failing:
- inputs of at most `small_threshold` elements are logged inline;
- larger ones are written to three files named after the active seed:
      original_<seed>.txt
      <reference>_sorted_<seed>.txt
      <candidate>_sorted_<seed>.txt
Either way the comparison then raises; there is no retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from ..algorithms.base import Compare, natural_compare
from ..patterns.seed import SeedState
from ..values.types import deep_equal

SMALL_INPUT_THRESHOLD = 100

__all__ = [
    "SMALL_INPUT_THRESHOLD",
    "DifferentialMismatch",
    "LengthMismatch",
    "DifferentialResult",
    "compare",
]

logger = logging.getLogger(__name__)


class LengthMismatch(AssertionError):
    """A sort changed the length of its input: an implementation bug."""


class DifferentialMismatch(AssertionError):
    """Reference and candidate disagree at some position."""

    def __init__(self, message: str, *, index: int, seed: int, artifacts: Sequence[Path] = ()) -> None:
        super().__init__(message)
        self.index = index
        self.seed = seed
        self.artifacts = list(artifacts)


@dataclass(frozen=True)
class DifferentialResult:
    reference: str
    candidate: str
    length: int


def _name(algo: Any) -> str:
    return str(getattr(algo, "NAME", getattr(algo, "__name__", repr(algo))))


def compare(
    reference: Any,
    candidate: Any,
    data: Sequence[Any],
    *,
    seed_state: SeedState,
    artifact_dir: Union[str, Path] = ".",
    small_threshold: int = SMALL_INPUT_THRESHOLD,
    compare_fn: Optional[Compare] = None,
) -> DifferentialResult:
    """
    Sort clones of `data` with `reference.sort_by` and `candidate.sort_by`
    and check the results position by position.

    Parameters
    ----------
    reference, candidate :
        Algorithm modules (or any object) exposing `sort_by(v, compare)` and,
        optionally, `NAME`.
    data : sequence
        Input values. Never mutated; each sort gets its own clone.
    seed_state : SeedState
        Read only to name diagnostics.
    artifact_dir : path
        Where large-input artifacts are written.

    Raises
    ------
    LengthMismatch
        If either result differs in length from the input.
    DifferentialMismatch
        At the first position where the results are not deep-equal.
    """
    cmp = natural_compare if compare_fn is None else compare_fn
    original: List[Any] = list(data)
    expected: List[Any] = list(data)
    actual: List[Any] = list(data)

    reference.sort_by(expected, cmp)
    candidate.sort_by(actual, cmp)

    ref_name, cand_name = _name(reference), _name(candidate)
    if not (len(expected) == len(actual) == len(original)):
        raise LengthMismatch(
            f"length changed: original={len(original)} {ref_name}={len(expected)} {cand_name}={len(actual)}"
        )

    for index, (a, b) in enumerate(zip(expected, actual)):
        if not deep_equal(a, b):
            _fail(
                index=index,
                original=original,
                expected=expected,
                actual=actual,
                ref_name=ref_name,
                cand_name=cand_name,
                seed=seed_state.current_seed,
                artifact_dir=Path(artifact_dir),
                small_threshold=small_threshold,
            )

    return DifferentialResult(reference=ref_name, candidate=cand_name, length=len(original))


def _fail(
    *,
    index: int,
    original: List[Any],
    expected: List[Any],
    actual: List[Any],
    ref_name: str,
    cand_name: str,
    seed: int,
    artifact_dir: Path,
    small_threshold: int,
) -> None:
    if len(original) <= small_threshold:
        logger.error("Seed: %d", seed)
        logger.error("Original: %r", original)
        logger.error("Expected: %r", expected)
        logger.error("Got:      %r", actual)
        raise DifferentialMismatch(
            f"{cand_name} differs from {ref_name} at index {index} (seed {seed})",
            index=index,
            seed=seed,
        )

    artifact_dir.mkdir(parents=True, exist_ok=True)
    paths = [
        artifact_dir / f"original_{seed}.txt",
        artifact_dir / f"{ref_name}_sorted_{seed}.txt",
        artifact_dir / f"{cand_name}_sorted_{seed}.txt",
    ]
    for path, values in zip(paths, (original, expected, actual)):
        path.write_text(repr(values), encoding="utf-8")

    logger.error(
        "Failed comparison, see files %s, %s, and %s", *(p.name for p in paths)
    )
    raise DifferentialMismatch(
        f"{cand_name} differs from {ref_name} at index {index} (seed {seed}); "
        f"artifacts in {artifact_dir}",
        index=index,
        seed=seed,
        artifacts=paths,
    )
