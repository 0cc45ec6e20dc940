"""
Benchmark adapters.

Every module in this package exposes the same entry point so the runner can
import algorithms by name:

    sort(a: list[int], *, config: dict | None = None) -> list[int]

`a` is never mutated. Adapter config keys (all optional):
    width            "byte" | "word"        (default "word")
    mode             "direct" | "index"     (default "direct")
    descending       bool, word width only  (default False)
    quicksort_limit  int > 0
    shellsort_const  int > 0
"""

ALGORITHM_MODULES = ("insertion_sort", "quicksort", "shellsort", "builtin_timsort")

__all__ = ["ALGORITHM_MODULES"]
