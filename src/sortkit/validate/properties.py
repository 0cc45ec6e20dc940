"""
Property helpers for validating sorting results.

These functions provide lightweight checks used by the tests and, as a
sanity validator, by the benchmark harness.

Public API (stable):
    is_nondecreasing(xs, less=None) -> bool
    first_nondecreasing_violation_index(xs, less=None) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict[int, int]
    assert_no_mutation(before, after) -> None
    is_index_permutation(index, first, last) -> bool
    gather(buffer, index, first, last) -> list[int]
    is_stable(keys, tags) -> bool

Notes
-----
- "Nondecreasing" is judged under the same ordering the sort used: with a
  comparator `less`, xs is ordered iff no later element is `less` than its
  predecessor.
- Stability cannot be inferred from values alone when equal keys are
  indistinguishable, so is_stable works on (key, tag) pairs where the tag
  records each element's original position.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "is_index_permutation",
    "gather",
    "is_stable",
]

Less = Callable[[int, int], bool]


def is_nondecreasing(xs: Sequence[int], less: Optional[Less] = None) -> bool:
    """Return True iff no element is ordered before its predecessor."""
    return first_nondecreasing_violation_index(xs, less) is None


def first_nondecreasing_violation_index(
    xs: Sequence[int], less: Optional[Less] = None
) -> Optional[int]:
    """
    Return the first index i where xs[i+1] belongs before xs[i], or None.

    Useful for precise error messages:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if less is None:
            if xs[i] > xs[i + 1]:
                return i
        elif less(xs[i + 1], xs[i]):
            return i
    return None


def is_permutation(a: Sequence[int], b: Sequence[int]) -> bool:
    """
    Return True iff `a` and `b` contain exactly the same multiset of values.
    """
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[int], b: Sequence[int]) -> Dict[int, int]:
    """
    Return a dict of value -> count difference (count_a - count_b).

    Empty dict means `a` and `b` have identical multiplicities.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: d for k, d in diff.items() if d != 0}


def assert_no_mutation(before: Sequence[int], after: Sequence[int]) -> None:
    """
    Assert that two sequences are element-wise equal; index sorts must leave
    their buffer untouched.

    Raises AssertionError naming the first differing position.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Buffer mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Buffer mutated at index {i}: before={x}, after={y}")


def is_index_permutation(index: Sequence[int], first: int, last: int) -> bool:
    """True iff index[first..last] is a bijection onto first..last."""
    if first > last:
        return True
    window = [int(v) for v in index[first:last + 1]]
    return sorted(window) == list(range(first, last + 1))


def gather(buffer: Sequence[int], index: Sequence[int], first: int, last: int) -> List[int]:
    """Values of buffer[first..last] in the order described by the index."""
    return [buffer[index[k]] for k in range(first, last + 1)]


def is_stable(keys: Sequence[int], tags: Sequence[int]) -> bool:
    """
    Given sorted keys and the original position (tag) of each element,
    return True iff equal keys appear in increasing tag order.
    """
    for i in range(len(keys) - 1):
        if keys[i] == keys[i + 1] and tags[i] > tags[i + 1]:
            return False
    return True
