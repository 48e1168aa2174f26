"""
Validation utilities public API.

Re-exports:
    - Oracle:
        oracle_sort, equals_oracle

    - Property checks:
        is_nondecreasing, first_nondecreasing_violation_index,
        is_permutation, same_objects,
        first_stability_violation, assert_no_mutation

    - Differential tester:
        compare, DifferentialMismatch, LengthMismatch, DifferentialResult

    - Panic safety:
        stress, ComparatorInterrupt, OwnershipViolation, verify_ownership
"""

from .differential import (
    DifferentialMismatch,
    DifferentialResult,
    LengthMismatch,
    compare,
)
from .oracle import equals_oracle, oracle_sort
from .panic_safety import (
    ComparatorInterrupt,
    OwnershipViolation,
    StressOutcome,
    stress,
    verify_ownership,
)
from .properties import (
    assert_no_mutation,
    first_nondecreasing_violation_index,
    first_stability_violation,
    is_nondecreasing,
    is_permutation,
    same_objects,
)

__all__ = [
    "DifferentialMismatch",
    "DifferentialResult",
    "LengthMismatch",
    "compare",
    "oracle_sort",
    "equals_oracle",
    "ComparatorInterrupt",
    "OwnershipViolation",
    "StressOutcome",
    "stress",
    "verify_ownership",
    "assert_no_mutation",
    "first_nondecreasing_violation_index",
    "first_stability_violation",
    "is_nondecreasing",
    "is_permutation",
    "same_objects",
]
