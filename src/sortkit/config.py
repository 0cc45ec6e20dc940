"""
Tuning constants and feature flags for the sort library.

Two tuning constants shape the algorithms:

- QUICKSORT_LIMIT (default 10): partitions holding this many elements or
  fewer are left for the trailing insertion-sort pass.
- SHELLSORT_CONST (default 3): gap multiplier c in h = c*h + 1.

Both must be positive integers; values above ~20 are accepted but are very
unlikely to be useful. They are fixed when a library is built (see
sortkit.library.build_library), never passed per sort call.

Feature flags select which algorithm/mode/width variants a library builds,
so unused combinations can be left out entirely.

Public API (stable):
    SortConfig(quicksort_limit=10, shellsort_const=3, algorithms=..., modes=..., widths=...)
    SortConfig.from_mapping(d) / .from_yaml(path) / .from_env(environ)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Union

import yaml

from .errors import ConfigError

log = logging.getLogger(__name__)

__all__ = [
    "QUICKSORT_LIMIT",
    "SHELLSORT_CONST",
    "USEFUL_MAX",
    "ALGORITHMS",
    "MODES",
    "WIDTHS",
    "ENV_QUICKSORT_LIMIT",
    "ENV_SHELLSORT_CONST",
    "SortConfig",
]

QUICKSORT_LIMIT = 10
SHELLSORT_CONST = 3
USEFUL_MAX = 20

ALGORITHMS = ("insertion", "quicksort", "shellsort")
MODES = ("direct", "index")
WIDTHS = ("byte", "word")

ENV_QUICKSORT_LIMIT = "SORTKIT_QUICKSORT_LIMIT"
ENV_SHELLSORT_CONST = "SORTKIT_SHELLSORT_CONST"


@dataclass(frozen=True)
class SortConfig:
    quicksort_limit: int = QUICKSORT_LIMIT
    shellsort_const: int = SHELLSORT_CONST
    algorithms: FrozenSet[str] = field(default_factory=lambda: frozenset(ALGORITHMS))
    modes: FrozenSet[str] = field(default_factory=lambda: frozenset(MODES))
    widths: FrozenSet[str] = field(default_factory=lambda: frozenset(WIDTHS))

    def __post_init__(self) -> None:
        _check_constant("quicksort_limit", self.quicksort_limit)
        _check_constant("shellsort_const", self.shellsort_const)
        # Accept any iterable of names but store frozensets so configs stay hashable.
        object.__setattr__(self, "algorithms", _check_flags("algorithms", self.algorithms, ALGORITHMS))
        object.__setattr__(self, "modes", _check_flags("modes", self.modes, MODES))
        object.__setattr__(self, "widths", _check_flags("widths", self.widths, WIDTHS))

    def enables(self, algorithm: str, mode: str, width: str) -> bool:
        return algorithm in self.algorithms and mode in self.modes and width in self.widths

    def replace(self, **changes: Any) -> "SortConfig":
        values = self.to_dict()
        values.update(changes)
        return SortConfig.from_mapping(values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quicksort_limit": self.quicksort_limit,
            "shellsort_const": self.shellsort_const,
            "algorithms": sorted(self.algorithms),
            "modes": sorted(self.modes),
            "widths": sorted(self.widths),
        }

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "SortConfig":
        """
        Build a config from a plain mapping (e.g. a parsed YAML section).

        Unknown keys are rejected so typos do not silently fall back to defaults.
        """
        if values is None:
            return cls()
        if not isinstance(values, Mapping):
            raise ConfigError(f"sort config must be a mapping; got {type(values).__name__}")
        known = {"quicksort_limit", "shellsort_const", "algorithms", "modes", "widths"}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown sort config keys: {unknown}")
        kwargs: Dict[str, Any] = {}
        for key in ("quicksort_limit", "shellsort_const"):
            if key in values:
                kwargs[key] = values[key]
        for key in ("algorithms", "modes", "widths"):
            if key in values:
                raw = values[key]
                if isinstance(raw, str):
                    raw = [raw]
                kwargs[key] = raw
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "SortConfig":
        """Load a config from YAML; a top-level ``sorting:`` section is used if present."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            doc = yaml.safe_load(f)
        if isinstance(doc, Mapping) and "sorting" in doc:
            doc = doc["sorting"]
        return cls.from_mapping(doc)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SortConfig":
        """
        Read tuning constant overrides from the environment.

        Only the two constants are read here; feature flags are a build-time
        choice made through from_mapping / from_yaml.
        """
        if environ is None:
            environ = os.environ
        kwargs: Dict[str, Any] = {}
        for key, env_name in (
            ("quicksort_limit", ENV_QUICKSORT_LIMIT),
            ("shellsort_const", ENV_SHELLSORT_CONST),
        ):
            raw = environ.get(env_name)
            if raw is None or raw.strip() == "":
                continue
            try:
                kwargs[key] = int(raw)
            except ValueError as e:
                raise ConfigError(f"{env_name} must be a positive integer; got {raw!r}") from e
            log.info("Using %s=%s from the environment", env_name, kwargs[key])
        return cls(**kwargs)


# ------------------------- helpers ------------------------- #


def _check_constant(name: str, value: Any) -> None:
    # bool is an int subclass; True would silently mean 1.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be a positive integer; got {value!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be a positive integer; got {value}")
    if value > USEFUL_MAX:
        log.warning("%s=%d is above %d and unlikely to be useful", name, value, USEFUL_MAX)


def _check_flags(name: str, values: Iterable[str], allowed: Iterable[str]) -> FrozenSet[str]:
    if isinstance(values, str):
        values = [values]
    chosen = frozenset(values)
    if not chosen:
        raise ConfigError(f"{name} must enable at least one of {sorted(allowed)}")
    unknown = sorted(chosen - set(allowed))
    if unknown:
        raise ConfigError(f"Unknown {name}: {unknown}. Supported: {sorted(allowed)}")
    return chosen
