"""
sortkit: in-memory insertion sort, QuickSort and ShellSort over fixed-width
buffers, in direct (in-place) and index (permutation) modes.

The twelve sort functions below are bound from a default library whose
tuning constants come from SortConfig.from_env(), i.e. they are fixed once
at import time. Build a library with other constants or feature flags via
build_library(SortConfig(...)).

    >>> from sortkit import byte_buffer, quicksort_bytes
    >>> buf = byte_buffer([5, 3, 3, 1, 4])
    >>> quicksort_bytes(buf, 0, 4)
    >>> list(buf)
    [1, 3, 3, 4, 5]
"""

from .buffers import SortRange, byte_buffer, check_range, new_index, to_signed_word, word_buffer
from .config import QUICKSORT_LIMIT, SHELLSORT_CONST, SortConfig
from .errors import ConfigError, SortKitError, SortRangeError, VariantUnavailableError
from .library import SortLibrary, build_library

default_library = build_library(SortConfig.from_env())

insertion_sort_bytes = default_library.insertion_sort_bytes
insertion_sort_words = default_library.insertion_sort_words
insertion_sort_bytes_idx = default_library.insertion_sort_bytes_idx
insertion_sort_words_idx = default_library.insertion_sort_words_idx
quicksort_bytes = default_library.quicksort_bytes
quicksort_words = default_library.quicksort_words
quicksort_bytes_idx = default_library.quicksort_bytes_idx
quicksort_words_idx = default_library.quicksort_words_idx
shellsort_bytes = default_library.shellsort_bytes
shellsort_words = default_library.shellsort_words
shellsort_bytes_idx = default_library.shellsort_bytes_idx
shellsort_words_idx = default_library.shellsort_words_idx

__version__ = "0.1.0"

__all__ = [
    "SortRange",
    "byte_buffer",
    "word_buffer",
    "new_index",
    "check_range",
    "to_signed_word",
    "QUICKSORT_LIMIT",
    "SHELLSORT_CONST",
    "SortConfig",
    "SortKitError",
    "ConfigError",
    "SortRangeError",
    "VariantUnavailableError",
    "SortLibrary",
    "build_library",
    "default_library",
    "insertion_sort_bytes",
    "insertion_sort_words",
    "insertion_sort_bytes_idx",
    "insertion_sort_words_idx",
    "quicksort_bytes",
    "quicksort_words",
    "quicksort_bytes_idx",
    "quicksort_words_idx",
    "shellsort_bytes",
    "shellsort_words",
    "shellsort_bytes_idx",
    "shellsort_words_idx",
]
