"""
Value types and pattern transforms.

Re-exports:
    - deep_equal and the wrapping helpers
    - value variants (KeyedRecord, LargeAggregate, WideBlock,
      ExpensiveAggregate, OrderedHandle, HandleA, HandleB)
    - transforms (TRANSFORMS, CHEAP_TRANSFORMS, get_transform, keyed_records)
"""

from .transforms import (
    CHEAP_TRANSFORMS,
    TRANSFORMS,
    Transform,
    get_transform,
    keyed_records,
    transform_1k,
    transform_dyn,
    transform_f128,
    transform_i32,
    transform_large_val,
    transform_string,
    transform_u64,
    transform_unit,
)
from .types import (
    ExpensiveAggregate,
    HandleA,
    HandleB,
    KeyedRecord,
    LargeAggregate,
    OrderedHandle,
    WideBlock,
    deep_equal,
    wrap_i32,
    wrap_u64,
    wrap_u128,
)

__all__ = [
    "CHEAP_TRANSFORMS",
    "TRANSFORMS",
    "Transform",
    "get_transform",
    "keyed_records",
    "transform_1k",
    "transform_dyn",
    "transform_f128",
    "transform_i32",
    "transform_large_val",
    "transform_string",
    "transform_u64",
    "transform_unit",
    "ExpensiveAggregate",
    "HandleA",
    "HandleB",
    "KeyedRecord",
    "LargeAggregate",
    "OrderedHandle",
    "WideBlock",
    "deep_equal",
    "wrap_i32",
    "wrap_u64",
    "wrap_u128",
]
