"""
Dataset generators for the sort benchmarks and property tests.

Every dataset targets one element width, chosen by params["width"]:
    "word" (default): values in [-32768, 32767], stored as signed words
    "byte":           values in [0, 255]

Implemented distributions:
- "random":        uniform draws over an inclusive range (default: the whole
                   width domain).
- "nearly_sorted": ascending ramp spread over the domain, then
                   ceil(swap_frac * n) random index swaps.
- "few_uniques":   up to k distinct values, sampled uniformly into n slots.
- "small_range":   uniform over a narrow range (default [0, 15]), which
                   produces many duplicates.
- "sorted":        deterministic ascending ramp.
- "reversed":      deterministic descending ramp.
- "all_equal":     n copies of one value (params["value"], default 0); the
                   maximally unbalanced input for QuickSort's partitioning.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Ranges in params["range"] are **inclusive** and must lie inside the width
  domain.
- Ramps ("nearly_sorted", "sorted", "reversed") hold n distinct values when
  the domain allows it and repeat values once n exceeds the domain size.
- Returns a Python `list[int]`; the algorithms copy it into a fixed-width
  buffer themselves.
- The caller supplies the RNG (for reproducibility across runs).
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

from ..buffers import BYTE_MAX, WORD_MAX, WORD_MIN

SUPPORTED_DISTS = {
    "random",
    "nearly_sorted",
    "few_uniques",
    "small_range",
    "sorted",
    "reversed",
    "all_equal",
}
WIDTH_DOMAINS: Dict[str, Tuple[int, int]] = {
    "byte": (0, BYTE_MAX),
    "word": (WORD_MIN, WORD_MAX),
}
__all__ = ["SUPPORTED_DISTS", "WIDTH_DOMAINS", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        Distribution specification, e.g.

            {"dist": "random", "params": {"width": "byte"}}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}
            {"dist": "few_uniques", "params": {"k": 8, "range": [0, 99]}}
            {"dist": "small_range", "params": {"min_val": 1, "max_val": 6}}
            {"dist": "all_equal", "params": {"value": 7}}

    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).
        Deterministic distributions leave it untouched.

    Returns
    -------
    list[int]
        A list of length `n` with every value inside the width domain.

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params", None) or {}
    if not isinstance(params, dict):
        raise ValueError("spec.params must be a dict")
    width = _parse_width(params)
    domain = WIDTH_DOMAINS[width]

    if n == 0:
        return []

    if dist == "random":
        lo, hi = _parse_optional_inclusive_range(params, default=domain, domain=domain)
        # Generator.integers is half-open by default; endpoint=True makes it inclusive.
        return rng.integers(lo, hi, size=n, endpoint=True, dtype=np.int64).tolist()

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = _ramp(n, domain)
        num_swaps = int(np.ceil(swap_frac * n))
        if num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i = int(idxs[2 * k])
            j = int(idxs[2 * k + 1])
            # i == j is a no-op; effective swaps may be fewer than requested.
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "few_uniques":
        k = _parse_k(params)
        lo, hi = _parse_optional_inclusive_range(params, default=domain, domain=domain)
        actual_k = int(min(k, n, hi - lo + 1))
        chosen = rng.choice(np.arange(lo, hi + 1, dtype=np.int64), size=actual_k, replace=False)
        picks = rng.integers(0, actual_k, size=n)
        return chosen[picks].tolist()

    if dist == "small_range":
        lo, hi = _parse_small_range(params, domain)
        return rng.integers(lo, hi, size=n, endpoint=True, dtype=np.int64).tolist()

    if dist == "sorted":
        return _ramp(n, domain)

    if dist == "reversed":
        return _ramp(n, domain)[::-1]

    if dist == "all_equal":
        value = params.get("value", 0)
        if not _is_int_like(value) or not (domain[0] <= int(value) <= domain[1]):
            raise ValueError(f"all_equal.params.value must be an integer in {list(domain)}; got {value!r}")
        return [int(value)] * n

    # Unreachable because of the check above; keep explicit for clarity.
    raise ValueError(f"Unhandled dataset dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_width(params: Dict[str, Any]) -> str:
    width = params.get("width", "word")
    if width not in WIDTH_DOMAINS:
        raise ValueError(f"params.width must be one of {sorted(WIDTH_DOMAINS)}; got {width!r}")
    return width


def _ramp(n: int, domain: Tuple[int, int]) -> List[int]:
    """Nondecreasing values spread evenly over the domain, starting at its minimum."""
    lo, hi = domain
    span = hi - lo + 1
    return [lo + (i * span) // n for i in range(n)]


def _parse_optional_inclusive_range(
    params: Dict[str, Any], default: Tuple[int, int], domain: Tuple[int, int]
) -> Tuple[int, int]:
    """
    Parse an optional inclusive integer range from params.
    If not present, return `default`.
    """
    if "range" not in params:
        return default
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    return _check_bounds(lo, hi, domain)


def _check_bounds(lo: int, hi: int, domain: Tuple[int, int]) -> Tuple[int, int]:
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    if lo < domain[0] or hi > domain[1]:
        raise ValueError(f"params.range [{lo}, {hi}] exceeds the width domain {list(domain)}")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    """
    Parse and validate swap_frac in [0.0, 1.0] for nearly_sorted.
    Default to 0.05 if not provided.
    """
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}"
        )
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not _is_int_like(k) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return int(k)


def _parse_small_range(params: Dict[str, Any], domain: Tuple[int, int]) -> Tuple[int, int]:
    """
    Parse the inclusive range for "small_range": either params["range"] or
    params["min_val"] / params["max_val"] (defaults 0 and 15).
    """
    if "range" in params:
        return _parse_optional_inclusive_range(params, default=(0, 15), domain=domain)

    min_raw = params.get("min_val", 0)
    max_raw = params.get("max_val", 15)
    if not _is_int_like(min_raw) or not _is_int_like(max_raw):
        raise ValueError("small_range params.min_val/max_val must be integers")
    return _check_bounds(int(min_raw), int(max_raw), domain)


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types, but not bool
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
