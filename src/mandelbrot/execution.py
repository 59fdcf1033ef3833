"""Execution helpers for Mandelbrot CLI workflows."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

from .computation import render
from .config import RenderConfig
from .logging import log_to_mlflow, mlflow_enabled
from .report import RenderReport, save_report
from .timing import time_function, timer


def render_config(config: RenderConfig) -> RenderReport:
    """Render ``config`` and record how long it took."""
    counts, wall_time = time_function(
        render, config.bounds, config.upper_left, config.lower_right, config.limit
    )
    return RenderReport(counts, {"wall_time": wall_time})


def run_single_render(
    config: RenderConfig,
    output: str | Path | None = None,
    suite_name: Optional[str] = None,
) -> RenderReport:
    """Render a single configuration, print its summary, save and track it."""
    print(
        f"[Run] Starting render '{config.run_name}' "
        f"(size={config.image_size}, limit={config.limit})",
        flush=True,
    )

    report = render_config(config)
    summary = report.summary()
    print(
        f"[Result] escaped={summary['escaped']} bounded={summary['bounded']} "
        f"max_escape={summary['max_escape']}",
        flush=True,
    )

    path = None
    if output is not None:
        path = save_report(report, config, output)
        print(f"[Run] Escape counts saved to {path}", flush=True)

    if mlflow_enabled():
        print("[Run] Render finished, logging to MLflow...", flush=True)
        log_to_mlflow(config, report, suite_name or "default", path)
    else:
        print("[Run] SKIP_MLFLOW set - skipping MLflow logging.", flush=True)

    print(f"[Timing] Total: {summary['wall_time']:.4f}s")
    return report


def run_sweep(
    configs: Sequence[RenderConfig],
    task_id: Optional[int] = None,
    descriptor: Optional[str] = None,
    output_dir: str | Path | None = None,
    suite_name: Optional[str] = None,
) -> int:
    """Run a list of configurations, or only the one at ``task_id``."""
    descriptor = descriptor or "sweep"

    if not configs:
        print("ERROR: No configurations found in sweep", file=sys.stderr)
        return 1

    if task_id is not None:
        if task_id < 0 or task_id >= len(configs):
            print(f"ERROR: task-id {task_id} out of range [0, {len(configs) - 1}]", file=sys.stderr)
            return 1
        config = configs[task_id]
        print(f"[Task {task_id}] Running: {config.run_name}")
        run_single_render(config, _output_path(output_dir, config), suite_name)
        return 0

    print("=" * 70)
    print(f"Running {len(configs)} configurations from {descriptor}")
    print("=" * 70)

    failures: list[tuple[int, str, str]] = []

    with timer() as elapsed:
        for idx, cfg in enumerate(configs):
            print(f"\n[{idx + 1}/{len(configs)}] {cfg.run_name}")
            try:
                run_single_render(cfg, _output_path(output_dir, cfg), suite_name)
            except (OSError, ValueError) as exc:
                print(f"    ✗ FAILED: {exc}", file=sys.stderr)
                failures.append((idx, cfg.run_name, str(exc)))
            else:
                print("    ✓ Completed")
        total_time = elapsed()

    print("\n" + "=" * 70)
    print("Summary")
    print("=" * 70)
    print(f"Total:      {len(configs)}")
    print(f"Successful: {len(configs) - len(failures)}")
    print(f"Failed:     {len(failures)}")
    print(f"Wall time:  {total_time:.4f}s")

    if failures:
        print("\nFailed configurations:")
        for idx, name, _ in failures:
            print(f"  [{idx}] {name}")
        return 1

    return 0


def _output_path(output_dir: str | Path | None, config: RenderConfig) -> Optional[Path]:
    if output_dir is None:
        return None
    return Path(output_dir) / f"{config.run_name}.npz"
