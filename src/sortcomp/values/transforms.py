"""
Order-preserving mappings from generated integers to sortable values.

All transforms accept an empty sequence. Arithmetic that could leave the
target width wraps deterministically instead of raising, so setup never
fails halfway through a benchmark or test.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .types import (
    INT32_MAX,
    ExpensiveAggregate,
    HandleA,
    HandleB,
    KeyedRecord,
    LargeAggregate,
    OrderedHandle,
    WideBlock,
    wrap_i32,
    wrap_u64,
)

Transform = Callable[[Sequence[int]], List[Any]]

__all__ = [
    "Transform",
    "transform_i32",
    "transform_u64",
    "transform_string",
    "transform_1k",
    "transform_f128",
    "transform_large_val",
    "transform_dyn",
    "transform_unit",
    "keyed_records",
    "TRANSFORMS",
    "CHEAP_TRANSFORMS",
    "get_transform",
]


def transform_i32(values: Sequence[int]) -> List[int]:
    return [wrap_i32(v) for v in values]


def transform_u64(values: Sequence[int]) -> List[int]:
    # Shift into the unsigned range, then spread over 64 bits.
    return [wrap_u64((wrap_i32(v) + INT32_MAX + 1) * INT32_MAX) for v in values]


def transform_string(values: Sequence[int]) -> List[str]:
    # Zero padded so lexicographic order matches numeric order.
    return [f"{min(abs(wrap_i32(v)), INT32_MAX):010d}" for v in values]


def transform_1k(values: Sequence[int]) -> List[LargeAggregate]:
    return [LargeAggregate(wrap_i32(v)) for v in values]


def transform_f128(values: Sequence[int]) -> List[ExpensiveAggregate]:
    return [ExpensiveAggregate(wrap_i32(v)) for v in values]


def transform_large_val(values: Sequence[int]) -> List[WideBlock]:
    return [WideBlock(wrap_i32(v)) for v in values]


def transform_dyn(values: Sequence[int]) -> List[OrderedHandle]:
    out: List[OrderedHandle] = []
    for v in values:
        v = wrap_i32(v)
        out.append(HandleA(v) if v < INT32_MAX // 2 else HandleB(v))
    return out


def transform_unit(values: Sequence[int]) -> List[Tuple[()]]:
    # Zero-sized values: all equal to each other.
    return [()] * len(values)


def keyed_records(keys: Sequence[int], extras: Sequence[int]) -> List[KeyedRecord]:
    if len(keys) != len(extras):
        raise ValueError(f"keys/extras length mismatch: {len(keys)} != {len(extras)}")
    return [KeyedRecord(wrap_i32(k), wrap_i32(e)) for k, e in zip(keys, extras)]


TRANSFORMS: Dict[str, Transform] = {
    "i32": transform_i32,
    "u64": transform_u64,
    "string": transform_string,
    "1k": transform_1k,
    "f128": transform_f128,
    "large_val": transform_large_val,
    "dyn": transform_dyn,
}

# Transforms still benchmarked above 100_000 elements.
CHEAP_TRANSFORMS = frozenset({"i32", "u64"})


def get_transform(name: str, table: Optional[Dict[str, Transform]] = None) -> Transform:
    table = TRANSFORMS if table is None else table
    if name not in table:
        raise ValueError(f"Unknown transform: {name!r}. Known: {sorted(table)}")
    return table[name]
