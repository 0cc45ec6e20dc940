"""Median-of-three QuickSort with an insertion-sort finish."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ._common import run_library_sort

__all__ = ["sort"]


def sort(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    return run_library_sort("quicksort", a, config)
