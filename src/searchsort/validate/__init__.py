"""
Validation utilities public API.

Re-exports:
    - Oracles:
        ORACLE_NAME
        oracle_sort
        equals_oracle
        oracle_first_index
        oracle_contains

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_permutation
        permutation_counter_diff
        assert_no_mutation
        is_valid_match
"""

from .oracle import (
    ORACLE_NAME,
    equals_oracle,
    oracle_contains,
    oracle_first_index,
    oracle_sort,
)
from .properties import (
    assert_no_mutation,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    is_valid_match,
    permutation_counter_diff,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "equals_oracle",
    "oracle_first_index",
    "oracle_contains",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "is_valid_match",
]
