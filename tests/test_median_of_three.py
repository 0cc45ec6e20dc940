"""
Exhaustive brute-force checks of pivot selection and partitioning.

A wrong median-of-three does not produce unsorted output, it silently
degrades QuickSort towards quadratic behaviour, so the pieces are checked
directly against every small array over a tiny alphabet.
"""

from __future__ import annotations

import importlib
import itertools
import operator

import pytest

from sortkit import SortConfig, build_library, new_index
from sortkit.engine import partition, quicksort, select_pivot
from sortkit.validate import is_index_permutation, oracle_sort


def _descending(a: int, b: int) -> bool:
    return a < b  # follows(a, b) for descending order


def _arrays(max_len: int, alphabet: int):
    for n in range(2, max_len + 1):
        for values in itertools.product(range(alphabet), repeat=n):
            yield list(values)


@pytest.mark.parametrize("follows", [operator.gt, _descending])
def test_select_pivot_moves_median_to_first(follows) -> None:
    for a in _arrays(6, 3):
        first, last = 0, len(a) - 1
        mid = first + (last - first) // 2
        trio = [a[first], a[mid], a[last]]
        ordered = sorted(trio, reverse=follows is _descending)
        slots = list(a)
        p = select_pivot(slots, slots.__getitem__, first, last, follows)
        assert p == ordered[1], (a, p)
        assert slots[first] == p, (a, slots)
        assert sorted(slots) == sorted(a)
        # only first, mid and last may move
        untouched = [k for k in range(len(a)) if k not in (first, mid, last)]
        assert all(slots[k] == a[k] for k in untouched)


@pytest.mark.parametrize("follows", [operator.gt, _descending])
def test_partition_splits_around_pivot(follows) -> None:
    for a in _arrays(7, 3):
        slots = list(a)
        at = partition(slots, slots.__getitem__, 0, len(a) - 1, follows)
        assert 0 <= at < len(a)
        p = slots[at]
        assert all(not follows(v, p) for v in slots[:at]), (a, slots, at)
        assert all(follows(v, p) for v in slots[at + 1:]), (a, slots, at)
        assert sorted(slots) == sorted(a)


@pytest.mark.parametrize("limit", [1, 2, 3])
def test_quicksort_exhaustive_small_arrays(limit: int) -> None:
    for a in _arrays(7, 4):
        slots = list(a)
        quicksort(slots, slots.__getitem__, 0, len(a) - 1, operator.gt, limit)
        assert slots == oracle_sort(a), (a, limit)


def test_partition_on_subrange_leaves_outside_alone() -> None:
    for a in _arrays(5, 3):
        slots = [9] + list(a) + [9]
        partition(slots, slots.__getitem__, 1, len(a), operator.gt)
        assert slots[0] == 9 and slots[-1] == 9


def test_index_quicksort_exhaustive_small_arrays() -> None:
    lib = build_library(SortConfig(quicksort_limit=1))
    for a in _arrays(6, 3):
        buf = bytearray(a)
        last = len(a) - 1
        index = lib.quicksort_bytes_idx(buf, new_index(buf), 0, last)
        assert list(buf) == a
        assert is_index_permutation(index, 0, last)
        assert [buf[i] for i in index] == sorted(a)


@pytest.mark.parametrize(
    "make",
    [
        lambda n: list(range(n)),
        lambda n: list(range(n, 0, -1)),
        lambda n: [7] * n,
        lambda n: [(i * 7919) % 251 for i in range(n)],
    ],
    ids=["sorted", "reversed", "all_equal", "scrambled"],
)
def test_recursion_depth_is_logarithmic(monkeypatch, make) -> None:
    qs = importlib.import_module("sortkit.engine.quicksort")

    n = 1024
    depth = 0
    deepest = 0
    original = qs._partition_ranges

    def tracking(*args):
        nonlocal depth, deepest
        depth += 1
        deepest = max(deepest, depth)
        try:
            return original(*args)
        finally:
            depth -= 1

    monkeypatch.setattr(qs, "_partition_ranges", tracking)
    slots = make(n)
    qs.quicksort(slots, slots.__getitem__, 0, n - 1, operator.gt, 1)
    assert slots == sorted(make(n))
    # each true recursive call handles at most half of its parent's range
    assert deepest <= n.bit_length()
