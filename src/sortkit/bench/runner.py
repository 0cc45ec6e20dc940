"""
Experiment runner: orchestrates a full benchmarking sweep from a YAML config.

Usage (from repo root):
    sortkit-bench experiments/configs/01_random_scaling.yaml
    python -m sortkit.bench.runner experiments/configs/02_quicksort_limit.yaml -v

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample / failure
    - summary.csv             # median + IQR per (algo, n)
    - (console) rich table + tqdm progress

Config keys:
    experiment_name, output_dir, seed, repeats, warmup, disable_gc,
    timeout_seconds, dataset, sizes, algorithms      (required)
    sorting: {quicksort_limit, shellsort_const}       (optional library defaults)
    validate: bool                                    (optional, default true)

Each algorithms entry is {name, label?, config?}; `name` is a module under
sortkit.algorithms, `label` (default: name) must be unique, and `config` is
the adapter config. A missing config.width is taken from the dataset.

Design notes:
- For each size n, we generate ONE dataset and give the same input to every algorithm.
- Harness handles warmup/GC/validation; we keep timing clean.
- On timeout/error/invalid output for an algorithm at size n, we skip larger
  sizes for that algorithm.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from sortkit import __version__
from sortkit.algorithms import ALGORITHM_MODULES
from sortkit.algorithms._common import descending
from sortkit.bench.measure import time_sort_call
from sortkit.buffers import INDEX_CAPACITY
from sortkit.config import SortConfig
from sortkit.datasets import make_dataset
from sortkit.validate import ORACLE_NAME, first_nondecreasing_violation_index, permutation_counter_diff

log = logging.getLogger(__name__)
_console = Console()

SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    label: str
    name: str
    sort_fn: Any
    config: Dict[str, Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        doc = yaml.safe_load(f)
    if not isinstance(doc, dict):
        raise ValueError(f"Experiment config must be a YAML mapping: {path}")
    return doc


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        suffix += 1
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta(sorting: SortConfig) -> Dict[str, Any]:
    return {
        "sortkit": __version__,
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "sorting": sorting.to_dict(),
        "oracle": ORACLE_NAME,
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(
    cfg_algos: List[Dict[str, Any]], sorting: SortConfig, dataset_width: str
) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        label = str(entry.get("label", name))
        if label in seen:
            raise ValueError(f"Duplicate algorithm label in config: {label}")
        seen.add(label)

        if name not in ALGORITHM_MODULES:
            raise ValueError(f"Unknown algorithm {name!r}. Supported: {list(ALGORITHM_MODULES)}")

        try:
            mod = importlib.import_module(f"sortkit.algorithms.{name}")
        except ImportError as e:
            raise ImportError(f"Could not import algorithm module 'sortkit.algorithms.{name}': {e!r}") from e

        if not hasattr(mod, "sort"):
            raise AttributeError(f"Algorithm module '{name}' must define a callable `sort(a, *, config=None)`")

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{label}': 'config' must be a dict if provided")

        # Library defaults first, then the entry's own overrides.
        merged: Dict[str, Any] = {
            "quicksort_limit": sorting.quicksort_limit,
            "shellsort_const": sorting.shellsort_const,
            "width": dataset_width,
        }
        merged.update(config)
        specs.append(AlgoSpec(label=label, name=name, sort_fn=getattr(mod, "sort"), config=merged))
    return specs


def _make_validator(config: Dict[str, Any]):
    less = descending if config.get("descending") else None

    def validate(a: List[int], out: List[int]) -> Optional[str]:
        diff = permutation_counter_diff(a, out)
        if diff:
            return f"output is not a permutation of the input (count_in - count_out: {diff})"
        i = first_nondecreasing_violation_index(out, less)
        if i is not None:
            return f"output out of order at i={i}: {out[i]} then {out[i + 1]}"
        return None

    return validate


def _iqr_ns(group: pd.DataFrame) -> int:
    q1 = group["time_ns"].quantile(0.25)
    q3 = group["time_ns"].quantile(0.75)
    return int(q3 - q1)


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    # Only successful samples carry time_ns
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    agg = (
        df.groupby(["algo", "n"], as_index=False)
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
    )
    iqr_vals = (
        df.groupby(["algo", "n"])[["time_ns"]]
        .apply(_iqr_ns)
        .rename("iqr_ns")
        .reset_index()
    )
    out = agg.merge(iqr_vals, on=["algo", "n"], how="left")
    out[["median_ns", "min_ns", "max_ns", "iqr_ns"]] = out[["median_ns", "min_ns", "max_ns", "iqr_ns"]].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")
    picks: List[Tuple[str, int]] = []
    if sizes:
        first = sizes[0]
        mid = sizes[len(sizes) // 2]
        last = sizes[-1]
        # dict keeps order and drops repeated sizes
        for npick in dict.fromkeys([first, mid, last]):
            picks.append(("n=" + str(npick), npick))
            table.add_column("n=" + str(npick), justify="right")

    def _format_cell(median_ns: int, iqr_ns: int) -> str:
        return f"{median_ns / 1e6:.2f} ± {iqr_ns / 1e6:.2f}"

    for algo in summary["algo"].unique():
        row = [f"[bold]{algo}[/]"]
        for _, npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                row.append(_format_cell(int(s["median_ns"].values[0]), int(s["iqr_ns"].values[0])))
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path, *, progress: bool = True) -> Path:
    cfg = _load_yaml(config_path)

    required = ["experiment_name", "output_dir", "seed", "repeats", "warmup", "disable_gc", "timeout_seconds", "dataset", "sizes", "algorithms"]
    missing = [k for k in required if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes: List[int] = [int(n) for n in cfg["sizes"]]
    repeats: int = int(cfg["repeats"])
    warmup: bool = bool(cfg["warmup"])
    disable_gc: bool = bool(cfg["disable_gc"])
    timeout_seconds: float = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    algos_cfg: List[Dict[str, Any]] = list(cfg["algorithms"])
    validate_outputs: bool = bool(cfg.get("validate", True))
    sorting = SortConfig.from_mapping(cfg.get("sorting"))

    if not sizes or any(n < 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
    dataset_width = (dataset_spec.get("params") or {}).get("width", "word")

    algos = _resolve_algorithms(algos_cfg, sorting, dataset_width)
    if any(a.config.get("mode") == "index" for a in algos) and max(sizes) > INDEX_CAPACITY:
        raise ValueError(f"Index-mode sorts support at most {INDEX_CAPACITY} elements; got n={max(sizes)}")

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    resolved = dict(cfg)
    resolved["sorting"] = sorting.to_dict()
    resolved["algorithms"] = [{"name": a.name, "label": a.label, "config": a.config} for a in algos]
    _write_yaml(resolved, cfg_resolved_path)

    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(sorting), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    per_algo_skip = {a.label: False for a in algos}
    validators = {a.label: _make_validator(a.config) for a in algos} if validate_outputs else {}

    log.info("Run directory: %s", run_dir)
    log.info("Experiment: %s", experiment_name)
    log.info("Algorithms: %s", ", ".join(a.label for a in algos))

    for n in tqdm(sizes, desc="Sizes", unit="n", disable=not progress):
        base_a = make_dataset(n, dataset_spec, rng)

        for a_spec in algos:
            if per_algo_skip[a_spec.label]:
                continue

            res = time_sort_call(
                algo_name=a_spec.label,
                algo_fn=a_spec.sort_fn,
                a=base_a,
                config=a_spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
                defensive_copy=True,
                validate=validators.get(a_spec.label),
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": a_spec.label,
                        "n": n,
                        "dataset": dataset_spec,
                        "trial": trial_idx,
                        "time_ns": int(t_ns),
                        "config": a_spec.config,
                    },
                    results_path,
                )

            status = res.get("status", "ok")
            if status != "ok":
                per_algo_skip[a_spec.label] = True
                log.warning("%s: %s at n=%d; skipping larger sizes", a_spec.label, status, n)
                _append_jsonl(
                    {
                        "algo": a_spec.label,
                        "n": n,
                        "status": status,
                        "error": res.get("error"),
                        "timed_out_on_repeat": res.get("timed_out_on_repeat"),
                        "config": a_spec.config,
                    },
                    results_path,
                )

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    if progress:
        _print_rich_summary(summary_df, sizes)

    log.info("Wrote %s, %s, %s and %s", results_path, summary_path, meta_path, cfg_resolved_path)
    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sorting benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, rich_tracebacks=True)],
    )
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
