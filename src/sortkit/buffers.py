"""
Fixed-width buffers and inclusive sort ranges.

The sort routines work on any mutable integer sequence, but two concrete
element widths are canonical:

- byte buffers: ``bytearray`` (unsigned slots, 0..255)
- word buffers: ``array('h')`` (signed 16-bit slots, -32768..32767)

Index arrays always use word-sized slots (``array('H')``), regardless of the
width of the data they describe.

Public API (stable):
    SortRange(first, last)
    check_range(buffer, first, last, index=None) -> SortRange
    byte_buffer(values) -> bytearray
    word_buffer(values) -> array('h')
    new_index(buffer_or_length) -> array('H')
    to_signed_word(value) -> int
"""

from __future__ import annotations

from array import array
from typing import Iterable, Iterator, MutableSequence, NamedTuple, Optional, Sequence, Union

from .errors import SortRangeError

__all__ = [
    "BYTE_MAX",
    "WORD_MIN",
    "WORD_MAX",
    "INDEX_CAPACITY",
    "SortRange",
    "check_range",
    "byte_buffer",
    "word_buffer",
    "new_index",
    "to_signed_word",
]

BYTE_MAX = 0xFF
WORD_MIN = -0x8000
WORD_MAX = 0x7FFF
# An index slot is one unsigned word, so it can address this many positions.
INDEX_CAPACITY = 0x10000

Buffer = MutableSequence[int]


class SortRange(NamedTuple):
    """Inclusive ``[first, last]`` span of a buffer. ``first > last`` is empty."""

    first: int
    last: int

    @classmethod
    def whole(cls, buffer: Sequence[int]) -> "SortRange":
        return cls(0, len(buffer) - 1)

    @property
    def is_empty(self) -> bool:
        return self.first > self.last

    @property
    def size(self) -> int:
        return max(0, self.last - self.first + 1)

    def positions(self) -> Iterator[int]:
        return iter(range(self.first, self.last + 1))


def check_range(
    buffer: Sequence[int],
    first: int,
    last: int,
    index: Optional[Sequence[int]] = None,
) -> SortRange:
    """
    Validate an inclusive range against `buffer` (and `index`, if given).

    Empty ranges are accepted unconditionally since every sort treats them as a
    no-op. Raises SortRangeError for a non-empty range that falls outside the
    buffer or the index array.
    """
    span = SortRange(int(first), int(last))
    if span.is_empty:
        return span
    if span.first < 0:
        raise SortRangeError(f"range start must be nonnegative; got first={span.first}")
    if span.last >= len(buffer):
        raise SortRangeError(
            f"range [{span.first}, {span.last}] exceeds buffer of length {len(buffer)}"
        )
    if index is not None and span.last >= len(index):
        raise SortRangeError(
            f"range [{span.first}, {span.last}] exceeds index of length {len(index)}"
        )
    return span


def to_signed_word(value: int) -> int:
    """Fold a raw 16-bit word (0..65535 or already signed) to two's complement."""
    value = int(value)
    if not (WORD_MIN <= value <= 0xFFFF):
        raise ValueError(f"value does not fit in a word: {value}")
    return value - 0x10000 if value > WORD_MAX else value


def byte_buffer(values: Iterable[int]) -> bytearray:
    # bytearray itself rejects anything outside 0..255
    return bytearray(values)


def word_buffer(values: Iterable[int]) -> array:
    return array("h", (to_signed_word(v) for v in values))


def new_index(buffer_or_length: Union[int, Sequence[int]]) -> array:
    """
    Allocate a zero-filled index array with one word-sized slot per element.

    Raises SortRangeError if the buffer is too long for word-sized positions.
    """
    if isinstance(buffer_or_length, int):
        n = buffer_or_length
    else:
        n = len(buffer_or_length)
    if n < 0:
        raise ValueError("index length must be nonnegative")
    if n > INDEX_CAPACITY:
        raise SortRangeError(
            f"cannot index {n} elements with word-sized slots (capacity {INDEX_CAPACITY})"
        )
    return array("H", bytes(2 * n))
