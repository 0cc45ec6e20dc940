"""
Assemble the public sort variants from the engine cores.

A library is built once from a SortConfig. Every enabled combination of

    algorithm in {insertion, quicksort, shellsort}
    mode      in {direct, index}
    width     in {byte, word}

becomes one callable, named e.g. ``quicksort_words_idx``:

    direct, byte:  f(buffer, first, last) -> None
    direct, word:  f(buffer, first, last, less=None) -> None
    index,  byte:  f(buffer, index, first, last) -> index
    index,  word:  f(buffer, index, first, last, less=None) -> index

Direct variants reorder buffer[first..last] in place. Index variants fill
index[first..last] with the identity permutation, then permute only the
index so that index[k] is the buffer position holding sorted rank k; the
buffer is never written.

Comparator contract
-------------------
``less(a, b)`` must be a strict weak ordering: never true for equivalent
elements, never true in both directions. Violations are not detected; the
result (including the index permutation) is then undefined. Without a
comparator, word variants use signed ``<`` on the stored values and byte
variants always use unsigned ``<``.
"""

from __future__ import annotations

import logging
import operator
from functools import lru_cache
from typing import Callable, Dict, List, MutableSequence, Optional, Tuple

from .buffers import check_range
from .config import ALGORITHMS, MODES, WIDTHS, SortConfig
from .engine import insertion_sort, quicksort, shellsort
from .errors import VariantUnavailableError

log = logging.getLogger(__name__)

__all__ = [
    "VariantKey",
    "SortLibrary",
    "build_library",
    "variant_name",
    "VARIANT_NAMES",
]

VariantKey = Tuple[str, str, str]
Less = Callable[[int, int], bool]
Follows = Callable[[int, int], bool]
Core = Callable[..., None]

_PREFIXES = {
    "insertion": "insertion_sort",
    "quicksort": "quicksort",
    "shellsort": "shellsort",
}
_SUFFIXES = {"byte": "bytes", "word": "words"}


def variant_name(algorithm: str, mode: str, width: str) -> str:
    name = f"{_PREFIXES[algorithm]}_{_SUFFIXES[width]}"
    return name + "_idx" if mode == "index" else name


VARIANT_NAMES: Dict[str, VariantKey] = {
    variant_name(a, m, w): (a, m, w) for a in ALGORITHMS for m in MODES for w in WIDTHS
}


class SortLibrary:
    """
    The set of sort variants built for one SortConfig.

    Variants are reachable by attribute (``lib.shellsort_bytes``) or through
    ``lib.variant("shellsort", "direct", "byte")``. Variants left out by the
    config's feature flags raise VariantUnavailableError.
    """

    def __init__(self, config: SortConfig, variants: Dict[VariantKey, Callable[..., object]]):
        self.config = config
        self._variants = dict(variants)

    def variant(self, algorithm: str, mode: str = "direct", width: str = "word") -> Callable[..., object]:
        key = (algorithm, mode, width)
        if key not in self._variants:
            if algorithm not in ALGORITHMS or mode not in MODES or width not in WIDTHS:
                raise VariantUnavailableError(f"Unknown sort variant: {key}")
            raise VariantUnavailableError(
                f"{variant_name(*key)} is disabled by the library configuration"
            )
        return self._variants[key]

    def available(self) -> List[str]:
        return sorted(variant_name(*key) for key in self._variants)

    def __getattr__(self, name: str) -> Callable[..., object]:
        if name.startswith("_") or name not in VARIANT_NAMES:
            raise AttributeError(name)
        return self.variant(*VARIANT_NAMES[name])

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self.available()))

    def __repr__(self) -> str:
        return (
            f"SortLibrary(quicksort_limit={self.config.quicksort_limit}, "
            f"shellsort_const={self.config.shellsort_const}, variants={len(self._variants)})"
        )


@lru_cache(maxsize=None)
def build_library(config: Optional[SortConfig] = None) -> SortLibrary:
    """
    Build (or fetch the cached) library for `config`; defaults to SortConfig().
    """
    if config is None:
        config = SortConfig()
    variants: Dict[VariantKey, Callable[..., object]] = {}
    for algorithm in ALGORITHMS:
        core = _bind_core(algorithm, config)
        for mode in MODES:
            for width in WIDTHS:
                if not config.enables(algorithm, mode, width):
                    continue
                fn = _make_variant(core, mode, width)
                fn.__name__ = fn.__qualname__ = variant_name(algorithm, mode, width)
                variants[(algorithm, mode, width)] = fn
    log.debug(
        "Built %d sort variants (quicksort_limit=%d, shellsort_const=%d)",
        len(variants),
        config.quicksort_limit,
        config.shellsort_const,
    )
    return SortLibrary(config, variants)


# ------------------------- instantiation ------------------------- #


def _bind_core(algorithm: str, config: SortConfig) -> Core:
    """Fix the algorithm's tuning constant so every core shares one signature."""
    if algorithm == "insertion":
        return insertion_sort
    if algorithm == "quicksort":
        limit = config.quicksort_limit

        def quicksort_core(slots, value, first, last, follows):
            quicksort(slots, value, first, last, follows, limit)

        return quicksort_core
    if algorithm == "shellsort":
        const = config.shellsort_const

        def shellsort_core(slots, value, first, last, follows):
            shellsort(slots, value, first, last, follows, const)

        return shellsort_core
    raise VariantUnavailableError(f"Unknown algorithm: {algorithm!r}")


def _follows_for(less: Optional[Less]) -> Follows:
    if less is None:
        # signed for words; bytes are unsigned by construction
        return operator.gt
    return lambda a, b: less(b, a)


def _make_variant(core: Core, mode: str, width: str) -> Callable[..., object]:
    if mode == "direct" and width == "byte":

        def sort_direct_bytes(buffer: MutableSequence[int], first: int, last: int) -> None:
            span = check_range(buffer, first, last)
            if span.is_empty:
                return
            core(buffer, buffer.__getitem__, span.first, span.last, operator.gt)

        return sort_direct_bytes

    if mode == "direct":

        def sort_direct_words(
            buffer: MutableSequence[int], first: int, last: int, less: Optional[Less] = None
        ) -> None:
            span = check_range(buffer, first, last)
            if span.is_empty:
                return
            core(buffer, buffer.__getitem__, span.first, span.last, _follows_for(less))

        return sort_direct_words

    if width == "byte":

        def sort_index_bytes(
            buffer: MutableSequence[int], index: MutableSequence[int], first: int, last: int
        ) -> MutableSequence[int]:
            span = check_range(buffer, first, last, index)
            _run_indexed(core, buffer, index, span.first, span.last, operator.gt)
            return index

        return sort_index_bytes

    def sort_index_words(
        buffer: MutableSequence[int],
        index: MutableSequence[int],
        first: int,
        last: int,
        less: Optional[Less] = None,
    ) -> MutableSequence[int]:
        span = check_range(buffer, first, last, index)
        _run_indexed(core, buffer, index, span.first, span.last, _follows_for(less))
        return index

    return sort_index_words


def _run_indexed(
    core: Core,
    buffer: MutableSequence[int],
    index: MutableSequence[int],
    first: int,
    last: int,
    follows: Follows,
) -> None:
    if first > last:
        return
    for k in range(first, last + 1):
        index[k] = k

    def value(k: int) -> int:
        return buffer[index[k]]

    core(index, value, first, last, follows)
