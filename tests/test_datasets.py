"""Dataset generators."""

from __future__ import annotations

import numpy as np
import pytest

from sortkit.datasets import SUPPORTED_DISTS, WIDTH_DOMAINS, make_dataset


def _rng(seed: int = 0) -> np.random.Generator:
    return np.random.default_rng(seed)


@pytest.mark.parametrize("width", ["byte", "word"])
@pytest.mark.parametrize(
    "spec",
    [
        {"dist": "random"},
        {"dist": "nearly_sorted", "params": {"swap_frac": 0.1}},
        {"dist": "few_uniques", "params": {"k": 5}},
        {"dist": "small_range"},
        {"dist": "sorted"},
        {"dist": "reversed"},
        {"dist": "all_equal"},
    ],
)
def test_lengths_and_domains(width: str, spec) -> None:
    spec = {"dist": spec["dist"], "params": dict(spec.get("params", {}), width=width)}
    lo, hi = WIDTH_DOMAINS[width]
    for n in (0, 1, 17, 600):
        out = make_dataset(n, spec, _rng())
        assert isinstance(out, list)
        assert len(out) == n
        assert all(isinstance(v, int) for v in out)
        assert all(lo <= v <= hi for v in out)


def test_every_dist_is_covered() -> None:
    assert SUPPORTED_DISTS == {
        "random",
        "nearly_sorted",
        "few_uniques",
        "small_range",
        "sorted",
        "reversed",
        "all_equal",
    }


def test_same_seed_same_data() -> None:
    spec = {"dist": "random", "params": {"range": [-100, 100]}}
    assert make_dataset(50, spec, _rng(3)) == make_dataset(50, spec, _rng(3))


def test_ramps() -> None:
    byte_sorted = make_dataset(300, {"dist": "sorted", "params": {"width": "byte"}}, _rng())
    assert byte_sorted == sorted(byte_sorted)
    assert byte_sorted[0] == 0
    assert make_dataset(4, {"dist": "reversed", "params": {"width": "byte"}}, _rng()) == [192, 128, 64, 0]


def test_few_uniques_respects_k() -> None:
    out = make_dataset(500, {"dist": "few_uniques", "params": {"k": 4, "range": [0, 9]}}, _rng())
    assert 1 <= len(set(out)) <= 4


def test_all_equal_value() -> None:
    assert make_dataset(3, {"dist": "all_equal", "params": {"value": -7}}, _rng()) == [-7, -7, -7]


@pytest.mark.parametrize(
    "n,spec",
    [
        (-1, {"dist": "random"}),
        (3, {"dist": "bogo"}),
        (3, "random"),
        (3, {"dist": "random", "params": {"width": "dword"}}),
        (3, {"dist": "random", "params": {"range": [5, 1]}}),
        (3, {"dist": "random", "params": {"width": "byte", "range": [0, 256]}}),
        (3, {"dist": "nearly_sorted", "params": {"swap_frac": 1.5}}),
        (3, {"dist": "few_uniques", "params": {}}),
        (3, {"dist": "few_uniques", "params": {"k": True}}),
        (3, {"dist": "small_range", "params": {"min_val": -1, "width": "byte"}}),
        (3, {"dist": "all_equal", "params": {"value": 300, "width": "byte"}}),
    ],
)
def test_invalid_specs(n, spec) -> None:
    with pytest.raises(ValueError):
        make_dataset(n, spec, _rng())
