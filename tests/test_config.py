"""Tuning constants, feature flags and library assembly."""

from __future__ import annotations

import logging

import pytest

from sortkit import (
    QUICKSORT_LIMIT,
    SHELLSORT_CONST,
    ConfigError,
    SortConfig,
    VariantUnavailableError,
    build_library,
    byte_buffer,
    word_buffer,
)
from sortkit.config import ENV_QUICKSORT_LIMIT, ENV_SHELLSORT_CONST
from sortkit.library import VARIANT_NAMES


def test_defaults() -> None:
    cfg = SortConfig()
    assert (QUICKSORT_LIMIT, SHELLSORT_CONST) == (10, 3)
    assert cfg.quicksort_limit == 10
    assert cfg.shellsort_const == 3
    assert len(build_library(cfg).available()) == 12


@pytest.mark.parametrize("value", [0, -1, True, 2.5, "3", None])
@pytest.mark.parametrize("key", ["quicksort_limit", "shellsort_const"])
def test_bad_constants_rejected(key: str, value) -> None:
    with pytest.raises(ConfigError):
        SortConfig(**{key: value})


def test_config_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        SortConfig(quicksort_limit=0)


def test_large_constant_warns(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="sortkit.config"):
        SortConfig(shellsort_const=21)
    assert "unlikely to be useful" in caplog.text


def test_from_env() -> None:
    cfg = SortConfig.from_env({ENV_QUICKSORT_LIMIT: "4", ENV_SHELLSORT_CONST: " "})
    assert cfg.quicksort_limit == 4
    assert cfg.shellsort_const == 3


@pytest.mark.parametrize("raw", ["zero", "0", "-3"])
def test_from_env_rejects_bad_values(raw: str) -> None:
    with pytest.raises(ConfigError):
        SortConfig.from_env({ENV_SHELLSORT_CONST: raw})


def test_from_yaml_with_sorting_section(tmp_path) -> None:
    path = tmp_path / "tuning.yaml"
    path.write_text(
        "sorting:\n  quicksort_limit: 6\n  shellsort_const: 2\n  widths: byte\n",
        encoding="utf-8",
    )
    cfg = SortConfig.from_yaml(path)
    assert cfg.quicksort_limit == 6
    assert cfg.shellsort_const == 2
    assert cfg.widths == frozenset({"byte"})


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError, match="quicksort_limt"):
        SortConfig.from_mapping({"quicksort_limt": 5})


def test_replace_revalidates() -> None:
    cfg = SortConfig().replace(quicksort_limit=3)
    assert cfg.quicksort_limit == 3
    with pytest.raises(ConfigError):
        cfg.replace(shellsort_const=0)


@pytest.mark.parametrize(
    "flags",
    [
        {"algorithms": []},
        {"algorithms": ["mergesort"]},
        {"modes": ["sideways"]},
        {"widths": ["dword"]},
    ],
)
def test_bad_feature_flags_rejected(flags) -> None:
    with pytest.raises(ConfigError):
        SortConfig(**flags)


def test_feature_flags_leave_variants_out() -> None:
    lib = build_library(SortConfig(algorithms={"shellsort"}, modes={"direct"}, widths={"byte"}))
    assert lib.available() == ["shellsort_bytes"]

    buf = byte_buffer([3, 1, 2])
    lib.shellsort_bytes(buf, 0, 2)
    assert list(buf) == [1, 2, 3]

    with pytest.raises(VariantUnavailableError, match="quicksort_bytes"):
        lib.quicksort_bytes
    with pytest.raises(VariantUnavailableError):
        lib.variant("shellsort", "index", "byte")
    with pytest.raises(AttributeError):
        lib.mergesort_bytes


def test_unknown_variant_lookup() -> None:
    with pytest.raises(LookupError):
        build_library().variant("bogosort", "direct", "byte")


def test_build_library_is_cached() -> None:
    assert build_library(SortConfig(quicksort_limit=4)) is build_library(SortConfig(quicksort_limit=4))


def test_variant_names_cover_every_combination() -> None:
    assert len(VARIANT_NAMES) == 12
    assert VARIANT_NAMES["quicksort_words_idx"] == ("quicksort", "index", "word")
    assert VARIANT_NAMES["insertion_sort_bytes"] == ("insertion", "direct", "byte")
    lib = build_library()
    for name in VARIANT_NAMES:
        assert getattr(lib, name).__name__ == name


@pytest.mark.parametrize("limit", [1, 3, 10, 20])
def test_quicksort_limit_changes_only_speed(limit: int) -> None:
    values = [(i * 131) % 97 - 48 for i in range(250)]
    lib = build_library(SortConfig(quicksort_limit=limit))
    buf = word_buffer(values)
    lib.quicksort_words(buf, 0, len(buf) - 1)
    assert list(buf) == sorted(values)
