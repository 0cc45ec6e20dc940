"""
Timing harness for sorting algorithms.

We measure exactly one call to an algorithm's `sort(a, config=...)` per
sample, using a monotonic high-resolution clock. Copying, GC control, warmup
and output validation all happen outside the timed block.

Public API (stable):
    time_sort_call(... ) -> dict

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "status": "ok" | "timeout" | "error" | "invalid",
        "error": str | None,                # populated if status is "error" or "invalid"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, List, Optional

log = logging.getLogger(__name__)

__all__ = ["time_sort_call"]

# validate(input, output) -> error message, or None when the output is acceptable
Validator = Callable[[List[int], List[int]], Optional[str]]


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., List[int]],
    a: List[int],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    defensive_copy: bool,
    validate: Optional[Validator] = None,
) -> Dict[str, Any]:
    """
    Time repeated calls to `algo_fn(a, config=config)`.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for logs/records).
    algo_fn : Callable[..., list[int]]
        Callable implementing sort(a: list[int], *, config: dict | None).
    a : list[int]
        Input array. The algorithm must not mutate this input.
    config : dict | None
        Algorithm configuration passed through unchanged.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call before timing.
    disable_gc : bool
        If True, collect and disable Python GC during the timed loop; restore afterward.
    timeout_seconds : float
        Per-sample threshold. A call exceeding it marks status="timeout" and
        stops further sampling.
    defensive_copy : bool
        If True, copy the input outside each timed call and pass the copy.
    validate : callable, optional
        Checked once against the first sample's output. A returned message
        marks status="invalid" and stops sampling.

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    if warmup and repeats > 0:
        try:
            algo_fn(list(a) if defensive_copy else a, config=config)
        except Exception as e:
            log.warning("%s: warmup failed: %r", algo_name, e)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    if disable_gc:
        gc.collect()
        gc.disable()
    try:
        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a) if defensive_copy else a
            try:
                t0 = time.perf_counter_ns()
                out = algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()
            except Exception as e:
                log.warning("%s: run failed at repeat %d: %r", algo_name, r, e)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            if r == 0 and validate is not None:
                problem = validate(a, out)
                if problem is not None:
                    log.warning("%s: invalid output: %s", algo_name, problem)
                    result["status"] = "invalid"
                    result["error"] = problem
                    break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))
            if elapsed > threshold_ns:
                log.info("%s: sample %d exceeded %.3fs; stopping", algo_name, r, timeout_seconds)
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        # Leave GC disabled if the caller had it disabled.
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
