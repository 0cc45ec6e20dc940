"""Shared plumbing for the library-backed benchmark adapters."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..buffers import byte_buffer, new_index, word_buffer
from ..config import MODES, WIDTHS, SortConfig
from ..library import build_library

__all__ = ["parse_adapter_config", "run_library_sort", "descending"]

_TUNING_KEYS = ("quicksort_limit", "shellsort_const")


def descending(a: int, b: int) -> bool:
    return a > b


def parse_adapter_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Validate adapter config and fill in defaults. Raises ValueError."""
    cfg = dict(config or {})
    width = cfg.pop("width", "word")
    mode = cfg.pop("mode", "direct")
    desc = cfg.pop("descending", False)
    tuning = {k: cfg.pop(k) for k in _TUNING_KEYS if k in cfg}
    if cfg:
        raise ValueError(f"Unknown adapter config keys: {sorted(cfg)}")
    if width not in WIDTHS:
        raise ValueError(f"width must be one of {list(WIDTHS)}; got {width!r}")
    if mode not in MODES:
        raise ValueError(f"mode must be one of {list(MODES)}; got {mode!r}")
    if not isinstance(desc, bool):
        raise ValueError(f"descending must be a bool; got {desc!r}")
    if desc and width == "byte":
        raise ValueError("byte-width sorts take no comparator; descending requires width='word'")
    return {"width": width, "mode": mode, "descending": desc, "tuning": tuning}


def run_library_sort(algorithm: str, a: List[int], config: Optional[Dict[str, Any]]) -> List[int]:
    opts = parse_adapter_config(config)
    lib = build_library(SortConfig(**opts["tuning"]))
    width, mode = opts["width"], opts["mode"]
    fn = lib.variant(algorithm, mode, width)

    buf = byte_buffer(a) if width == "byte" else word_buffer(a)
    last = len(buf) - 1
    extra = (descending,) if opts["descending"] else ()

    if mode == "direct":
        fn(buf, 0, last, *extra)
        return list(buf)

    index = new_index(buf)
    fn(buf, index, 0, last, *extra)
    return [buf[i] for i in index]
