"""
ShellSort over the gap sequence h = c*h + 1 (c = shellsort constant).

Not stable. The largest gap is the biggest sequence member below the range
length; gaps then shrink by the inverse recurrence h = (h - 1) // c, which
always passes through 1 before reaching 0.
"""

from __future__ import annotations

from typing import Iterator, MutableSequence

from .insertion import Follows, ValueFn, gapped_insertion

__all__ = ["gap_sequence", "shellsort"]


def gap_sequence(length: int, const: int) -> Iterator[int]:
    h = 1
    while h < length:
        h = const * h + 1
    h = (h - 1) // const
    while h >= 1:
        yield h
        h = (h - 1) // const


def shellsort(
    slots: MutableSequence[int],
    value: ValueFn,
    first: int,
    last: int,
    follows: Follows,
    const: int,
) -> None:
    for gap in gap_sequence(last - first + 1, const):
        gapped_insertion(slots, value, first, last, gap, follows)
