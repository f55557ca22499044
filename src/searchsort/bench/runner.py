"""
Experiment runner: a benchmarking sweep over sizes driven by a YAML config.

Usage (from repo root):
    python -m searchsort.bench.runner experiments/configs/01_sort_scaling.yaml
    searchsort-bench experiments/configs/02_search_scaling.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used (defaults filled in)
    - meta.json               # environment info (python, numpy, cpu/ram, git commit, oracle)
    - results.jsonl           # one JSON line per timing sample, plus timeout/error lines
    - summary.csv             # median + IQR per (algo, n)

Design notes:
- For each size n we generate ONE dataset and give the same input to every algorithm.
- kind == "search": the dataset is sorted once per size and one query set is
  drawn for it; every searcher answers the same queries.
- On timeout/error for an algorithm at size n, larger sizes are skipped for it.
- With validate == true, the last output of each algorithm is checked against
  the oracle; a mismatch is recorded as an error.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from searchsort.bench.measure import time_search_calls, time_sort_call
from searchsort.datasets import make_dataset, make_queries
from searchsort.validate import ORACLE_NAME, equals_oracle, oracle_contains, oracle_sort

_console = Console()

# Public functions of searchsort.<kind> with the plain (seq) / (seq, target) signature.
ALGORITHMS = {
    "sort": ("bubble", "quick"),
    "search": ("linear", "binary", "binary_first", "jump", "exponential"),
}
KINDS = tuple(ALGORITHMS)
REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "kind",
    "dataset",
    "sizes",
    "algorithms",
]
DEFAULT_QUERIES = {"count": 1000, "hit_ratio": 0.5}
SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    fn: Callable[..., Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a YAML mapping")
    return cfg


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
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
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


# ------------------------- helpers: config ------------------------- #

def _resolve_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    resolved = dict(cfg)
    if resolved["kind"] not in KINDS:
        raise ValueError(f"Config 'kind' must be one of {list(KINDS)}; got {resolved['kind']!r}")

    sizes = resolved["sizes"]
    if not isinstance(sizes, list) or not sizes or any(
        not isinstance(n, int) or n < 0 for n in sizes
    ):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")

    if not isinstance(resolved["algorithms"], list) or not resolved["algorithms"]:
        raise ValueError("Config 'algorithms' must be a non-empty list")

    resolved.setdefault("validate", True)
    if resolved["kind"] == "search":
        resolved["queries"] = _resolve_queries(resolved.get("queries"))
    return resolved


def _resolve_queries(raw: Any) -> Dict[str, Any]:
    """Fill in query defaults and check count / hit_ratio before any run directory exists."""
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config 'queries' must be a mapping with count / hit_ratio; got {raw!r}")
    queries = dict(DEFAULT_QUERIES)
    queries.update(raw)

    count = queries["count"]
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise ValueError(f"queries.count must be a nonnegative int; got {count!r}")
    ratio = queries["hit_ratio"]
    if not isinstance(ratio, (int, float)) or isinstance(ratio, bool) or not 0.0 <= ratio <= 1.0:
        raise ValueError(f"queries.hit_ratio must be a float in [0.0, 1.0]; got {ratio!r}")
    return queries


def _resolve_algorithms(kind: str, cfg_algos: List[Any]) -> List[AlgoSpec]:
    """Map configured names onto functions of searchsort.<kind>."""
    mod = importlib.import_module(f"searchsort.{kind}")
    public = ALGORITHMS[kind]

    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name") if isinstance(entry, dict) else entry
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        if name not in public:
            raise ValueError(
                f"Unknown {kind} algorithm {name!r}. Available: {list(public)}"
            )
        seen.add(name)
        specs.append(AlgoSpec(name=name, fn=getattr(mod, name)))
    return specs


# ------------------------- helpers: validation ------------------------- #

def _check_output(
    kind: str, data: Sequence[Any], queries: Sequence[Any], output: Any
) -> Optional[str]:
    """Return an error message if `output` is wrong for this input, else None."""
    if output is None:
        return None
    if kind == "sort":
        if not equals_oracle(data, output):
            return "output does not match oracle"
        return None
    # `data` is sorted here, so membership goes through bisect, not a scan.
    for q, r in zip(queries, output):
        if r is None:
            ok = not oracle_contains(data, q)
        else:
            ok = 0 <= r < len(data) and data[r] == q
        if not ok:
            return f"invalid result {r!r} for target {q!r}"
    return None


# ------------------------- helpers: summary ------------------------- #

def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    out = df.groupby(["algo", "n"], as_index=False).agg(
        samples_ok=("time_ns", "count"),
        median_ns=("time_ns", "median"),
        iqr_ns=("time_ns", lambda s: s.quantile(0.75) - s.quantile(0.25)),
        min_ns=("time_ns", "min"),
        max_ns=("time_ns", "max"),
    )
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[
        ["median_ns", "iqr_ns", "min_ns", "max_ns"]
    ].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _format_cell(median_ns: Optional[int], iqr_ns: Optional[int]) -> str:
    if median_ns is None:
        return "—"
    median_ms = median_ns / 1e6
    if iqr_ns is None:
        return f"{median_ms:.3f}"
    return f"{median_ms:.3f} ± {iqr_ns / 1e6:.3f}"


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")

    picks: List[Tuple[str, int]] = []
    for npick in dict.fromkeys([sizes[0], sizes[len(sizes) // 2], sizes[-1]]):
        picks.append((f"n={npick}", npick))
        table.add_column(f"n={npick}", justify="right")

    for algo in summary["algo"].unique():
        row = [f"[bold]{algo}[/]"]
        for _, npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                row.append(_format_cell(int(s["median_ns"].iloc[0]), int(s["iqr_ns"].iloc[0])))
        table.add_row(*row)

    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = _resolve_config(_load_yaml(config_path))

    experiment_name = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    kind: str = cfg["kind"]
    sizes: List[int] = list(cfg["sizes"])
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    validate = bool(cfg["validate"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])

    algos = _resolve_algorithms(kind, list(cfg["algorithms"]))

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    per_algo_skip = {a.name: False for a in algos}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name} ({kind})")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")
    _console.print()

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        data = make_dataset(int(n), dataset_spec, rng)
        queries: List[Any] = []
        if kind == "search":
            data = oracle_sort(data)
            queries = make_queries(
                data, int(cfg["queries"]["count"]), cfg["queries"]["hit_ratio"], rng
            )

        for a_spec in algos:
            if per_algo_skip[a_spec.name]:
                continue

            if kind == "sort":
                res = time_sort_call(
                    algo_name=a_spec.name,
                    algo_fn=a_spec.fn,
                    a=data,
                    repeats=repeats,
                    warmup=warmup,
                    disable_gc=disable_gc,
                    timeout_seconds=timeout_seconds,
                )
            else:
                res = time_search_calls(
                    algo_name=a_spec.name,
                    algo_fn=a_spec.fn,
                    data=data,
                    queries=queries,
                    repeats=repeats,
                    warmup=warmup,
                    disable_gc=disable_gc,
                    timeout_seconds=timeout_seconds,
                )

            if validate and res["status"] != "error":
                problem = _check_output(kind, data, queries, res["output"])
                if problem is not None:
                    res["status"] = "error"
                    res["error"] = f"validation failed: {problem}"

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": int(n),
                        "dataset": dataset_spec,
                        "trial": int(trial_idx),
                        "time_ns": int(t_ns),
                    },
                    results_path,
                )

            status = res["status"]
            if status in ("timeout", "error"):
                per_algo_skip[a_spec.name] = True
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": int(n),
                        "status": status,
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "error": res["error"],
                    },
                    results_path,
                )
                _console.print(
                    f"[yellow]{a_spec.name}: {status} at n={n}; skipping larger sizes[/yellow]"
                )

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _print_rich_summary(summary_df, sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for path in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {path}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Run a sorting or searching benchmark experiment from a YAML config."
    )
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
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
