"""
Prediction-state trasher used before every "cold" benchmark call.

A fixed amount of branchy, data-dependent integer work on one value. The
working set is a 16-entry table, small enough to stay in L1: this disturbs
branch prediction and the interpreter's inline caches, not the memory
hierarchy. The result must be fed back into the measured input so the work
is never dead.
"""

from __future__ import annotations

from ..values.types import wrap_i32

__all__ = ["TRASH_ROUNDS", "trash_prediction_state"]

TRASH_ROUNDS = 512

_MASK32 = (1 << 32) - 1
_TABLE = (13, 2, 11, 7, 0, 9, 4, 15, 6, 1, 14, 3, 10, 5, 12, 8)


def trash_prediction_state(value: int) -> int:
    x = value & _MASK32
    acc = 0
    for i in range(TRASH_ROUNDS):
        t = _TABLE[(x ^ i) & 15]
        if x & 1:
            x = (3 * x + 1) & _MASK32
        else:
            x >>= 1
        if t > 11:
            acc += t
        elif t > 7:
            acc ^= x
        elif t & 1:
            acc -= i
        else:
            x ^= acc & 0xFFFF
        if x == 0:
            x = (value + i + 1) & _MASK32
        acc &= _MASK32
    return wrap_i32(x ^ acc)
