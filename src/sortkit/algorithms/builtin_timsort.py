"""
Reference baseline: Python's built-in sorted() (TimSort).

Accepts the same adapter config as the library-backed algorithms so the
runner can pass one config to every entry; only `descending` changes the
result, the remaining keys are validated and ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ._common import parse_adapter_config

__all__ = ["sort"]


def sort(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    opts = parse_adapter_config(config)
    return sorted(a, reverse=opts["descending"])
