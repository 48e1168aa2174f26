"""
Timing harness for sorting algorithms.

Two modes per (algorithm, transform, pattern, size):

- hot:  fresh input generated outside the timed block, then exactly one
        in-place sort call inside it, repeated for `repeats` samples. Inputs
        above `SMALL_INPUT_MAX` elements are timed in batches (one clock
        pair around several calls) to amortize timer overhead; small inputs
        are timed call by call.
- cold: before every single call the prediction-state trasher runs and its
        result overwrites the first generated integer, then the input is
        transformed and one call is timed on its own. Never batched.

Generation, transformation and GC collection stay outside the timed block.
An empty input skips trashing and timing altogether.

Returned dict schema:
    {
        "name": str,
        "mode": "hot" | "cold",
        "repeats": int,
        "batch": "small_input" | "large_input" | "per_iteration",
        "iters_per_sample": int,
        "samples_ns": list[int],     # mean ns per call for each sample
        "skipped_empty": int,        # generated inputs skipped because empty
        "status": "ok" | "empty",
    }
"""

from __future__ import annotations

import enum
import gc
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List

from .trash import trash_prediction_state

SMALL_INPUT_MAX = 30
# Upper bound on elements held alive by one large-input batch.
LARGE_BATCH_ELEMENTS = 1 << 20
# Upper bound on calls timed together in one large-input sample.
LARGE_BATCH_MAX_ITERS = 8

__all__ = [
    "SMALL_INPUT_MAX",
    "LARGE_BATCH_ELEMENTS",
    "LARGE_BATCH_MAX_ITERS",
    "BatchSize",
    "batch_size_for",
    "time_hot",
    "time_cold",
]


class BatchSize(enum.Enum):
    SMALL_INPUT = "small_input"
    LARGE_INPUT = "large_input"
    PER_ITERATION = "per_iteration"


def batch_size_for(size: int) -> BatchSize:
    return BatchSize.LARGE_INPUT if size > SMALL_INPUT_MAX else BatchSize.SMALL_INPUT


def _iters_per_sample(size: int) -> int:
    return max(1, min(LARGE_BATCH_MAX_ITERS, LARGE_BATCH_ELEMENTS // max(size, 1)))


@contextmanager
def _gc_paused(disable_gc: bool) -> Iterator[None]:
    prev_gc_enabled = gc.isenabled()
    if disable_gc:
        gc.collect()
        gc.disable()
    try:
        yield
    finally:
        # If GC was previously disabled, leave it disabled (respect caller's global state).
        if disable_gc and prev_gc_enabled:
            gc.enable()


def _check_args(repeats: int) -> None:
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")


def time_hot(
    *,
    name: str,
    sort_fn: Callable[[List[Any]], None],
    setup: Callable[[], List[Any]],
    size: int,
    repeats: int,
    warmup: bool = True,
    disable_gc: bool = True,
) -> Dict[str, Any]:
    """
    Take `repeats` timing samples of `sort_fn` on inputs built by `setup()`.

    Parameters
    ----------
    name : str
        Trial name (for records).
    sort_fn : Callable[[list], None]
        In-place sort.
    setup : Callable[[], list]
        Builds one fresh input (pattern + transform). Never timed.
    size : int
        Requested input size; selects the batch policy.

    Every generated input is checked: an empty one is skipped and counted in
    `skipped_empty`. Above `SMALL_INPUT_MAX` elements each sample times a
    batch of up to `iters_per_sample` calls and records the mean per call.
    """
    _check_args(repeats)
    batch = batch_size_for(size)
    per_sample = 1 if batch is BatchSize.SMALL_INPUT else _iters_per_sample(size)
    result: Dict[str, Any] = {
        "name": name,
        "mode": "hot",
        "repeats": repeats,
        "batch": batch.value,
        "iters_per_sample": per_sample,
        "samples_ns": [],
        "skipped_empty": 0,
        "status": "ok",
    }

    if warmup and repeats > 0:
        arg = setup()
        if arg:
            sort_fn(arg)

    samples: List[int] = result["samples_ns"]
    with _gc_paused(disable_gc):
        for _ in range(repeats):
            inputs = []
            for _ in range(per_sample):
                arg = setup()
                if arg:
                    inputs.append(arg)
                else:
                    result["skipped_empty"] += 1
            if not inputs:
                continue
            t0 = time.perf_counter_ns()
            for arg in inputs:
                sort_fn(arg)
            t1 = time.perf_counter_ns()
            samples.append((t1 - t0) // len(inputs))

    if repeats > 0 and not samples:
        result["status"] = "empty"
    return result


def time_cold(
    *,
    name: str,
    sort_fn: Callable[[List[Any]], None],
    pattern: Callable[[], List[int]],
    transform: Callable[[List[int]], List[Any]],
    repeats: int,
    warmup: bool = False,
    disable_gc: bool = True,
) -> Dict[str, Any]:
    """
    Time `repeats` isolated calls of `sort_fn`, trashing prediction state
    before each one.
    """
    _check_args(repeats)
    result: Dict[str, Any] = {
        "name": name,
        "mode": "cold",
        "repeats": repeats,
        "batch": BatchSize.PER_ITERATION.value,
        "iters_per_sample": 1,
        "samples_ns": [],
        "skipped_empty": 0,
        "status": "ok",
    }

    if warmup and repeats > 0:
        sort_fn(transform(pattern()))

    samples: List[int] = result["samples_ns"]
    with _gc_paused(disable_gc):
        for _ in range(repeats):
            ints = pattern()
            if not ints:
                result["skipped_empty"] += 1
                continue
            # Tie the trasher's output to the input so it cannot be skipped.
            ints[0] = trash_prediction_state(ints[0])
            arg = transform(ints)
            t0 = time.perf_counter_ns()
            sort_fn(arg)
            t1 = time.perf_counter_ns()
            samples.append(t1 - t0)

    if repeats > 0 and not samples:
        result["status"] = "empty"
    return result
