"""
Oracle for sorting correctness.

We use Python's built-in `sorted()` as the ground-truth oracle:
- Correct total order for integers, or for any strict weak ordering via
  functools.cmp_to_key
- Deterministic and portable
- Stable, so it also yields the exact permutation a stable index sort must
  produce

Public API (stable):
    oracle_sort(a, less=None) -> list[int]
    oracle_index(buffer, first, last, less=None) -> list[int]
    equals_oracle(a, out, less=None) -> bool

Conventions:
- The oracle never mutates its input and always returns a **new** list.
- Direct sorts in this repo must match oracle_sort exactly; stable index
  sorts (insertion sort, and QuickSort on ranges it hands entirely to the
  insertion pass) must match oracle_index exactly.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, List, Optional, Sequence

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "oracle_index", "equals_oracle"]

Less = Callable[[int, int], bool]


def _key(less: Less) -> Callable[[int], object]:
    def compare(a: int, b: int) -> int:
        if less(a, b):
            return -1
        if less(b, a):
            return 1
        return 0

    return cmp_to_key(compare)


def oracle_sort(a: Sequence[int], less: Optional[Less] = None) -> List[int]:
    """
    Return the ground-truth sorted output for `a`.

    Parameters
    ----------
    a : sequence of int
        Input values. The oracle does not mutate `a`.
    less : callable, optional
        Strict weak ordering; natural ascending order when omitted.

    Returns
    -------
    list[int]
        A new list with the same elements as `a`, sorted under `less`.
    """
    if less is None:
        return sorted(a)
    return sorted(a, key=_key(less))


def oracle_index(
    buffer: Sequence[int], first: int, last: int, less: Optional[Less] = None
) -> List[int]:
    """
    Stable argsort of buffer[first..last], as absolute buffer positions.

    Element k of the result is the position of the element with sorted rank k
    (counting from `first`).
    """
    positions = list(range(first, last + 1))
    if less is None:
        return sorted(positions, key=lambda i: buffer[i])
    key = _key(less)
    return sorted(positions, key=lambda i: key(buffer[i]))


def equals_oracle(a: Sequence[int], out: Sequence[int], less: Optional[Less] = None) -> bool:
    """True iff `out` is exactly equal to `oracle_sort(a, less)`."""
    return list(out) == oracle_sort(a, less)
