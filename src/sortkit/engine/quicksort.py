"""
QuickSort with median-of-three pivots and an insertion-sort finish.

Ranges holding `limit` elements or fewer are never partitioned; they are
swept up by a single insertion pass over the whole range at the end, which is
cheap because every element is by then within `limit` positions of its final
place.

Recursion only ever descends into the smaller side of a partition, while the
larger side is handled by rewriting `first`/`last` and looping. That bounds
the recursion depth to O(log n) for any input, including sorted, reversed and
all-equal buffers.
"""

from __future__ import annotations

from typing import MutableSequence

from .insertion import Follows, ValueFn, insertion_sort

__all__ = ["select_pivot", "partition", "quicksort"]


def select_pivot(
    slots: MutableSequence[int],
    value: ValueFn,
    first: int,
    last: int,
    follows: Follows,
) -> int:
    """
    Move the median of slots[first], the midpoint and slots[last] into `first`.

    Returns the pivot value. When slots[first] already holds the median
    nothing is swapped.
    """
    mid = first + (last - first) // 2
    p = value(first)
    vm = value(mid)
    vt = value(last)
    # vm lies between p and vt (in either direction)
    if not ((follows(p, vm) or follows(vm, vt)) and (follows(vt, vm) or follows(vm, p))):
        slots[first], slots[mid] = slots[mid], slots[first]
        return vm
    # vt lies between p and vm
    if not ((follows(p, vt) or follows(vt, vm)) and (follows(vm, vt) or follows(vt, p))):
        slots[first], slots[last] = slots[last], slots[first]
        return vt
    return p


def partition(
    slots: MutableSequence[int],
    value: ValueFn,
    first: int,
    last: int,
    follows: Follows,
) -> int:
    """
    Partition slots[first..last] around a median-of-three pivot.

    Elements that follow the pivot end up to its right, everything else
    (equal elements included) to its left. Returns the pivot's final position.
    """
    p = select_pivot(slots, value, first, last, follows)
    i = first - 1
    j = last
    while True:
        i += 1
        if i > j:
            break
        if follows(value(i), p):
            # Walk j down to the rightmost element that may stay left.
            while follows(value(j), p):
                j -= 1
                if j <= i:
                    break
            if j > i:
                slots[i], slots[j] = slots[j], slots[i]
            else:
                i -= 1
    i -= 1
    slots[i], slots[first] = slots[first], slots[i]
    return i


def _partition_ranges(
    slots: MutableSequence[int],
    value: ValueFn,
    first: int,
    last: int,
    follows: Follows,
    limit: int,
) -> None:
    while True:
        at = partition(slots, value, first, last, follows)
        left = at - first
        right = last - at
        if left > right:
            if right > limit:
                _partition_ranges(slots, value, at + 1, last, follows, limit)
            if left <= limit:
                return
            last = at - 1
        else:
            if left > limit:
                _partition_ranges(slots, value, first, at - 1, follows, limit)
            if right <= limit:
                return
            first = at + 1


def quicksort(
    slots: MutableSequence[int],
    value: ValueFn,
    first: int,
    last: int,
    follows: Follows,
    limit: int,
) -> None:
    if last - first + 1 > limit:
        _partition_ranges(slots, value, first, last, follows, limit)
    # With limit == 1 every leftover range has at most one element.
    if limit > 1:
        insertion_sort(slots, value, first, last, follows)
