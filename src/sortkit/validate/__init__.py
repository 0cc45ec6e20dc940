"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        oracle_sort
        oracle_index
        equals_oracle

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_permutation
        permutation_counter_diff
        assert_no_mutation
        is_index_permutation
        gather
        is_stable
"""

from .oracle import ORACLE_NAME, equals_oracle, oracle_index, oracle_sort
from .properties import (
    assert_no_mutation,
    first_nondecreasing_violation_index,
    gather,
    is_index_permutation,
    is_nondecreasing,
    is_permutation,
    is_stable,
    permutation_counter_diff,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "oracle_index",
    "equals_oracle",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "is_index_permutation",
    "gather",
    "is_stable",
]
