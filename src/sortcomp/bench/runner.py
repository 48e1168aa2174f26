"""
Benchmark runner: orchestrates a full hot/cold sweep from a YAML config.

Usage (from repo root):
    python -m sortcomp.bench.runner configs/bench_default.yaml
    MEASURE_COMP=1 sortcomp-bench configs/bench_default.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit, seed)
    - results.jsonl           # one JSON line per timing sample
    - summary.csv             # median + IQR per trial
    - comparisons.csv         # instead of the two above when counting comparisons
    - (console) rich/tqdm summaries

Design notes:
- Trials come from one table: every (algorithm, transform, pattern, size)
  combination, minus expensive transforms above 100_000 elements and
  non-random patterns below 3 elements.
- Every trial generates fresh input per call; nothing is shared between trials.
- With a null `seed` the fixed seed is disabled and randomness is self-checked
  before anything is measured.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
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

from sortcomp.algorithms import load_algorithm
from sortcomp.bench.counting import ComparisonCounter, counting_compare, measure_comp_count
from sortcomp.bench.measure import time_cold, time_hot
from sortcomp.patterns import BENCH_PATTERNS, PatternGenerator, SeedState, ensure_true_random, pattern_provider
from sortcomp.patterns.catalog import PatternProvider
from sortcomp.values.transforms import CHEAP_TRANSFORMS, Transform, get_transform

EXPENSIVE_SIZE_LIMIT = 100_000
MIN_PATTERN_SIZE = 3
MODES = ("hot", "cold")

_console = Console()
logger = logging.getLogger(__name__)


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Callable[[List[Any]], None]
    sort_by_fn: Callable[..., None]


@dataclass(frozen=True)
class BenchTrial:
    algo: AlgoSpec
    transform_name: str
    transform: Transform
    pattern_name: str
    provider: PatternProvider
    size: int

    def name(self, mode: str) -> str:
        return f"{self.algo.name}-{mode}-{self.transform_name}-{self.pattern_name}-{self.size}"

    def record(self) -> Dict[str, Any]:
        return {
            "algo": self.algo.name,
            "transform": self.transform_name,
            "pattern": self.pattern_name,
            "n": self.size,
        }


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


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
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta(seed_state: SeedState, measure_comparisons: bool) -> Dict[str, Any]:
    import platform
    meta = {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "seed": seed_state.current_seed,
        "fixed_seed": seed_state.is_fixed,
        "measure_comparisons": measure_comparisons,
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
    return meta


def _resolve_algorithms(cfg_algos: List[Any]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None) if isinstance(entry, dict) else entry
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must be a name or have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)
        mod = load_algorithm(name)
        specs.append(AlgoSpec(name=name, sort_fn=mod.sort, sort_by_fn=mod.sort_by))
    return specs


def measure_comparisons_requested(cfg: Dict[str, Any]) -> bool:
    """MEASURE_COMP in the environment (any value) or `measure_comparisons: true`."""
    return "MEASURE_COMP" in os.environ or bool(cfg.get("measure_comparisons", False))


def make_seed_state(seed: Optional[int]) -> Tuple[SeedState, PatternGenerator]:
    if seed is not None:
        state = SeedState(int(seed))
        return state, PatternGenerator(state)
    state = SeedState()
    state.disable_fixed_seed()
    generator = PatternGenerator(state)
    ensure_true_random(generator)
    return state, generator


# ------------------------- trial table ------------------------- #

def build_trials(
    algos: Sequence[AlgoSpec],
    transform_names: Sequence[str],
    pattern_names: Sequence[str],
    sizes: Sequence[int],
) -> List[BenchTrial]:
    trials: List[BenchTrial] = []
    for size in sizes:
        for transform_name in transform_names:
            if size > EXPENSIVE_SIZE_LIMIT and transform_name not in CHEAP_TRANSFORMS:
                # These are just too expensive.
                continue
            transform = get_transform(transform_name)
            for pattern_name in pattern_names:
                if size < MIN_PATTERN_SIZE and pattern_name != "random":
                    continue
                provider = pattern_provider(pattern_name)
                for algo in algos:
                    trials.append(
                        BenchTrial(
                            algo=algo,
                            transform_name=transform_name,
                            transform=transform,
                            pattern_name=pattern_name,
                            provider=provider,
                            size=int(size),
                        )
                    )
    return trials


def run_trial_timing(
    trial: BenchTrial,
    generator: PatternGenerator,
    *,
    modes: Sequence[str],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
) -> List[Dict[str, Any]]:
    def pattern() -> List[int]:
        return trial.provider(generator, trial.size)

    def setup() -> List[Any]:
        return trial.transform(pattern())

    results = []
    for mode in modes:
        if mode == "hot":
            res = time_hot(
                name=trial.name(mode),
                sort_fn=trial.algo.sort_fn,
                setup=setup,
                size=trial.size,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
            )
        elif mode == "cold":
            res = time_cold(
                name=trial.name(mode),
                sort_fn=trial.algo.sort_fn,
                pattern=pattern,
                transform=trial.transform,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
            )
        else:
            raise ValueError(f"Unknown mode {mode!r}; expected one of {MODES}")
        results.append(res)
    return results


def run_trial_comparisons(
    trial: BenchTrial,
    generator: PatternGenerator,
    counter: ComparisonCounter,
) -> int:
    counted = counting_compare(counter)

    def instrumented() -> None:
        data = trial.transform(trial.provider(generator, trial.size))
        trial.algo.sort_by_fn(data, counted)

    return measure_comp_count(trial.name("comp"), trial.size, instrumented, counter)


# ------------------------- summaries ------------------------- #

_SUMMARY_KEYS = ["algo", "mode", "transform", "pattern", "n"]
_SUMMARY_COLUMNS = _SUMMARY_KEYS + ["samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


def _iqr_ns(times: pd.Series) -> int:
    return int(times.quantile(0.75) - times.quantile(0.25))


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if df.empty or "time_ns" not in df:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]

    out = (
        df.groupby(_SUMMARY_KEYS, as_index=False)
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            iqr_ns=("time_ns", _iqr_ns),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
    )
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[["median_ns", "iqr_ns", "min_ns", "max_ns"]].astype("int64")
    return out.sort_values(_SUMMARY_KEYS, ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median over patterns, µs)")
    table.add_column("Algorithm", style="bold")
    table.add_column("Mode")
    table.add_column("Type")
    picks = sorted({sizes[0], sizes[len(sizes) // 2], sizes[-1]})
    for n in picks:
        table.add_column(f"n={n}", justify="right")

    if summary.empty:
        _console.print("(no samples)")
        return

    for (algo, mode, transform), group in summary.groupby(["algo", "mode", "transform"], sort=True):
        row = [f"[bold]{algo}[/]", str(mode), str(transform)]
        for n in picks:
            s = group[group["n"] == n]
            row.append("—" if s.empty else f"{s['median_ns'].median() / 1e3:.2f}")
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


def _print_rich_comparisons(comps: pd.DataFrame) -> None:
    table = Table(title="Mean comparisons per sort (largest n)")
    for col in ("Algorithm", "Type", "Pattern", "n", "Mean"):
        table.add_column(col, justify="right" if col in ("n", "Mean") else "left")
    if comps.empty:
        _console.print("(no measurements)")
        return
    largest = comps[comps["n"] == comps["n"].max()]
    for rec in largest.itertuples(index=False):
        table.add_row(rec.algo, rec.transform, rec.pattern, str(rec.n), str(rec.mean_comparisons))
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = _load_yaml(config_path)

    # Required keys & basic validation
    required = ["experiment_name", "output_dir", "repeats", "warmup", "disable_gc", "sizes", "algorithms", "transforms"]
    missing = [k for k in required if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes: List[int] = [int(n) for n in cfg["sizes"]]
    repeats: int = int(cfg["repeats"])
    warmup: bool = bool(cfg["warmup"])
    disable_gc: bool = bool(cfg["disable_gc"])
    transforms: List[str] = list(cfg["transforms"])
    patterns: List[str] = list(cfg.get("patterns") or [name for name, _ in BENCH_PATTERNS])
    modes: List[str] = list(cfg.get("modes") or MODES)

    if not sizes or any(n < 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
    unknown_modes = [m for m in modes if m not in MODES]
    if unknown_modes:
        raise ValueError(f"Unknown modes {unknown_modes}; expected a subset of {list(MODES)}")

    algos: List[AlgoSpec] = _resolve_algorithms(list(cfg["algorithms"]))
    trials = build_trials(algos, transforms, patterns, sizes)
    comp_mode = measure_comparisons_requested(cfg)
    seed_state, generator = make_seed_state(cfg.get("seed"))

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    comparisons_path = run_dir / "comparisons.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(seed_state, comp_mode), f, indent=2)

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")
    _console.print(f"[bold]Mode:[/bold] {'comparison count' if comp_mode else ', '.join(modes)}  "
                   f"[bold]Seed:[/bold] {seed_state.current_seed}")
    _console.print()

    if comp_mode:
        counter = ComparisonCounter()
        rows = []
        for trial in tqdm(trials, desc="Trials", unit="trial"):
            mean = run_trial_comparisons(trial, generator, counter)
            rows.append({**trial.record(), "mean_comparisons": mean})
        comps = pd.DataFrame(rows, columns=["algo", "transform", "pattern", "n", "mean_comparisons"])
        comps.to_csv(comparisons_path, index=False)
        _print_rich_comparisons(comps)
        _console.print(f"[bold green]Done.[/bold green] Wrote {comparisons_path}")
        return run_dir

    for trial in tqdm(trials, desc="Trials", unit="trial"):
        for res in run_trial_timing(
            trial, generator, modes=modes, repeats=repeats, warmup=warmup, disable_gc=disable_gc
        ):
            if res["status"] == "empty":
                logger.debug("%s: empty input, nothing timed", res["name"])
            for sample_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        **trial.record(),
                        "mode": res["mode"],
                        "batch": res["batch"],
                        "iters_per_sample": res["iters_per_sample"],
                        "sample": int(sample_idx),
                        "time_ns": int(t_ns),
                    },
                    results_path,
                )

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _print_rich_summary(summary_df, sorted(set(sizes)))

    _console.print(f"[bold green]Done.[/bold green] Wrote:")
    _console.print(f" - {results_path}")
    _console.print(f" - {summary_path}")
    _console.print(f" - {meta_path}")
    _console.print(f" - {cfg_resolved_path}")
    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sort benchmark (hot/cold or comparison counts) from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    return p.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = _parse_args()
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
