"""
Value variants sorted by the harness.

Every variant is totally ordered. Variants that carry data beyond their
ordering key also implement `deep_equal`, which compares that extra data as
well; this is what turns a stability bug into a visible mismatch.

Plain scalars (i32, u64) and text keys are represented by built-in `int`
and `str`; everything else is a small class below.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from functools import total_ordering
from typing import Any

import numpy as np

__all__ = [
    "INT32_MAX",
    "wrap_i32",
    "wrap_u64",
    "wrap_u128",
    "deep_equal",
    "KeyedRecord",
    "LargeAggregate",
    "WideBlock",
    "ExpensiveAggregate",
    "OrderedHandle",
    "HandleA",
    "HandleB",
]

INT32_MAX: int = 2**31 - 1

_U32_MASK = (1 << 32) - 1
_U64_MASK = (1 << 64) - 1
_U128_MASK = (1 << 128) - 1


def wrap_i32(x: int) -> int:
    """Two's complement wrap of an arbitrary int into i32."""
    x &= _U32_MASK
    return x - (1 << 32) if x > INT32_MAX else x


def wrap_u64(x: int) -> int:
    return x & _U64_MASK


def wrap_u128(x: int) -> int:
    return x & _U128_MASK


def deep_equal(a: Any, b: Any) -> bool:
    """
    Equality that is at least as strict as the ordering relation.

    Values defining their own `deep_equal` decide for themselves; anything
    else must have the same type and compare equal.
    """
    method = getattr(a, "deep_equal", None)
    if method is not None:
        return bool(method(b))
    return type(a) is type(b) and a == b


@total_ordering
class KeyedRecord:
    """
    Ordered and compared by `key` only, so two records can look equal to a
    sort while still being distinguishable through `extra`.
    """

    __slots__ = ("key", "extra")

    def __init__(self, key: int, extra: int) -> None:
        self.key = key
        self.extra = extra

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyedRecord):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: "KeyedRecord") -> bool:
        if not isinstance(other, KeyedRecord):
            return NotImplemented
        return self.key < other.key

    __hash__ = None  # type: ignore[assignment]

    def deep_equal(self, other: object) -> bool:
        return (
            isinstance(other, KeyedRecord)
            and self.key == other.key
            and self.extra == other.extra
        )

    def __repr__(self) -> str:
        return f"KeyedRecord(key={self.key}, extra={self.extra})"


@total_ordering
class LargeAggregate:
    """256 i32 slots (1 KiB); only slot 55 takes part in ordering."""

    __slots__ = ("values",)

    SLOTS = 256
    KEY_SLOT = 55

    def __init__(self, val: int) -> None:
        values = np.full(self.SLOTS, val, dtype=np.int32)
        values[54] = wrap_i32(6 * val)
        values[100] = wrap_i32(18 - val)
        self.values = values

    def as_key(self) -> int:
        return int(self.values[self.KEY_SLOT])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LargeAggregate):
            return NotImplemented
        return self.as_key() == other.as_key()

    def __lt__(self, other: "LargeAggregate") -> bool:
        if not isinstance(other, LargeAggregate):
            return NotImplemented
        return self.as_key() < other.as_key()

    __hash__ = None  # type: ignore[assignment]

    def deep_equal(self, other: object) -> bool:
        return isinstance(other, LargeAggregate) and bool(np.array_equal(self.values, other.values))

    def __repr__(self) -> str:
        return f"LargeAggregate(key={self.as_key()}, s54={int(self.values[54])}, s100={int(self.values[100])})"


@total_ordering
class WideBlock:
    """Four unsigned 128-bit lanes derived from one i32, ordered lexicographically."""

    __slots__ = ("lanes",)

    def __init__(self, val: int) -> None:
        base = abs(val)
        self.lanes = (
            wrap_u128(base - 6),
            wrap_u128(base + 3),
            wrap_u128(base - 2),
            base,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WideBlock):
            return NotImplemented
        return self.lanes == other.lanes

    def __lt__(self, other: "WideBlock") -> bool:
        if not isinstance(other, WideBlock):
            return NotImplemented
        return self.lanes < other.lanes

    __hash__ = None  # type: ignore[assignment]

    def deep_equal(self, other: object) -> bool:
        return self == other

    def __repr__(self) -> str:
        return f"WideBlock({list(self.lanes)})"


@total_ordering
class ExpensiveAggregate:
    """Two floats; every comparison divides them first."""

    __slots__ = ("x", "y")

    _LOG_BASE = math.log(4.1)

    def __init__(self, val: int) -> None:
        val_f = float(val) + float(INT32_MAX) + 6.0
        self.x = val_f + 0.1
        self.y = math.log(val_f) / self._LOG_BASE

    def ratio(self) -> float:
        return self.x / self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpensiveAggregate):
            return NotImplemented
        return self.ratio() == other.ratio()

    def __lt__(self, other: "ExpensiveAggregate") -> bool:
        if not isinstance(other, ExpensiveAggregate):
            return NotImplemented
        return self.ratio() < other.ratio()

    __hash__ = None  # type: ignore[assignment]

    def deep_equal(self, other: object) -> bool:
        return isinstance(other, ExpensiveAggregate) and self.x == other.x and self.y == other.y

    def __repr__(self) -> str:
        return f"ExpensiveAggregate(x={self.x!r}, y={self.y!r})"


@total_ordering
class OrderedHandle(ABC):
    """
    Ordering capability shared by the concrete handle kinds.

    Handles of different kinds compare with each other through `get_val()`,
    so a sort sees one element type while the records behind it differ in
    layout.
    """

    __slots__ = ()

    @abstractmethod
    def get_val(self) -> int:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedHandle):
            return NotImplemented
        return self.get_val() == other.get_val()

    def __lt__(self, other: "OrderedHandle") -> bool:
        if not isinstance(other, OrderedHandle):
            return NotImplemented
        return self.get_val() < other.get_val()

    __hash__ = None  # type: ignore[assignment]

    def deep_equal(self, other: object) -> bool:
        return self == other


class HandleA(OrderedHandle):
    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value

    def get_val(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"HandleA({self.value})"


class HandleB(OrderedHandle):
    __slots__ = ("value", "label", "payload")

    def __init__(self, value: int) -> None:
        self.value = value
        self.label = f"b{value}"
        self.payload = (value, value, value)

    def get_val(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"HandleB({self.value})"
