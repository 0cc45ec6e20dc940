"""
Algorithm cores shared by every sort variant.

Each core is written once against three seams:

- ``slots``: the sequence that gets permuted (the buffer in direct mode, the
  index array in index mode)
- ``value(k)``: reads the sort key for position k (``buffer[k]`` or
  ``buffer[index[k]]``)
- ``follows(a, b)``: True iff `a` must be placed after `b`

sortkit.library instantiates the cores for each width/mode/ordering.
"""

from .insertion import gapped_insertion, insertion_sort
from .quicksort import partition, quicksort, select_pivot
from .shellsort import gap_sequence, shellsort

__all__ = [
    "gapped_insertion",
    "insertion_sort",
    "select_pivot",
    "partition",
    "quicksort",
    "gap_sequence",
    "shellsort",
]
