"""
Stable insertion sort, and the gapped insertion pass ShellSort is built on.
"""

from __future__ import annotations

from typing import Callable, MutableSequence

__all__ = ["gapped_insertion", "insertion_sort"]

ValueFn = Callable[[int], int]
Follows = Callable[[int, int], bool]


def gapped_insertion(
    slots: MutableSequence[int],
    value: ValueFn,
    first: int,
    last: int,
    gap: int,
    follows: Follows,
) -> None:
    """
    Run `gap` interleaved insertion sorts over slots[first..last], one per
    residue class, where neighbours are `gap` positions apart.

    Each held element is compared against each shifted element exactly once,
    so comparators with side effects see one call per pair. If `follows`
    raises, the held element is written back into the open slot first, so
    slots[first..last] is still a permutation of its original contents.
    """
    for k in range(gap):
        for i in range(first + k + gap, last + 1, gap):
            held = slots[i]
            v = value(i)
            j = i - gap
            try:
                while j >= first and follows(value(j), v):
                    slots[j + gap] = slots[j]
                    j -= gap
            finally:
                slots[j + gap] = held


def insertion_sort(
    slots: MutableSequence[int],
    value: ValueFn,
    first: int,
    last: int,
    follows: Follows,
) -> None:
    """Stable: equal elements keep their original relative order."""
    gapped_insertion(slots, value, first, last, 1, follows)
