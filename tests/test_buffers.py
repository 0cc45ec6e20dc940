"""Buffer helpers and inclusive ranges."""

from __future__ import annotations

import pytest

from sortkit import SortRange, SortRangeError, byte_buffer, check_range, new_index, to_signed_word, word_buffer
from sortkit.buffers import INDEX_CAPACITY


def test_sort_range_basics() -> None:
    r = SortRange(2, 5)
    assert r.size == 4
    assert list(r.positions()) == [2, 3, 4, 5]
    assert not r.is_empty
    assert SortRange(2, 1).is_empty
    assert SortRange(2, 1).size == 0
    assert SortRange.whole([1, 2, 3]) == (0, 2)
    assert SortRange.whole([]).is_empty


def test_check_range_accepts_empty_anywhere() -> None:
    assert check_range([], 5, 4).is_empty
    assert check_range([1], 0, -1).is_empty


@pytest.mark.parametrize("first,last", [(-1, 0), (0, 3), (3, 3)])
def test_check_range_rejects_out_of_bounds(first: int, last: int) -> None:
    with pytest.raises(SortRangeError):
        check_range([1, 2, 3], first, last)


def test_check_range_checks_index_too() -> None:
    assert check_range([1, 2, 3], 0, 2, index=[0, 0, 0]) == (0, 2)
    with pytest.raises(SortRangeError, match="index"):
        check_range([1, 2, 3], 0, 2, index=[0, 0])


@pytest.mark.parametrize(
    "raw,signed",
    [(0, 0), (1, 1), (0x7FFF, 32767), (0x8000, -32768), (0xFFFF, -1), (-5, -5)],
)
def test_to_signed_word(raw: int, signed: int) -> None:
    assert to_signed_word(raw) == signed


@pytest.mark.parametrize("raw", [0x10000, -0x8001])
def test_to_signed_word_rejects_wide_values(raw: int) -> None:
    with pytest.raises(ValueError):
        to_signed_word(raw)


def test_buffer_constructors() -> None:
    assert word_buffer([1, 0xFFFF, -2]).tolist() == [1, -1, -2]
    assert word_buffer([]).typecode == "h"
    assert byte_buffer([0, 255]) == bytearray(b"\x00\xff")
    with pytest.raises(ValueError):
        byte_buffer([256])


def test_new_index() -> None:
    index = new_index(4)
    assert index.typecode == "H"
    assert index.tolist() == [0, 0, 0, 0]
    assert len(new_index(byte_buffer([1, 2, 3]))) == 3
    assert len(new_index(INDEX_CAPACITY)) == INDEX_CAPACITY
    with pytest.raises(SortRangeError):
        new_index(INDEX_CAPACITY + 1)
