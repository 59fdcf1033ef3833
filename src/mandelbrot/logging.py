"""MLflow logging for Mandelbrot renders."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Dict, Optional

import mlflow

from .config import RenderConfig
from .report import RenderReport

DEFAULT_EXPERIMENT_NAME = "mandelbrot_escape"


def mlflow_enabled() -> bool:
    """Tracking is on unless ``SKIP_MLFLOW`` is set to a non-empty value."""
    return not os.environ.get("SKIP_MLFLOW")


def log_to_mlflow(
    config: RenderConfig,
    report: RenderReport,
    suite_name: str = "default",
    artifact: str | Path | None = None,
) -> Optional[str]:
    """Log a render's parameters, summary metrics and counts dump to MLflow.

    The tracking server comes from ``MLFLOW_TRACKING_URI`` (MLflow's own
    default when unset) and the experiment from ``MLFLOW_EXPERIMENT_NAME``.

    Args:
        config: Render configuration, logged as params
        report: Render outputs, summary logged as metrics
        suite_name: Sweep suite the run belongs to, for tagging/filtering
        artifact: Optional ``.npz`` dump to attach to the run

    Returns:
        The MLflow run id, or ``None`` when logging is skipped.
    """
    if not mlflow_enabled():
        return None

    tracking_uri = os.environ.get("MLFLOW_TRACKING_URI")
    if tracking_uri:
        mlflow.set_tracking_uri(tracking_uri)
    mlflow.set_experiment(os.environ.get("MLFLOW_EXPERIMENT_NAME") or DEFAULT_EXPERIMENT_NAME)

    with mlflow.start_run(run_name=config.run_name) as run:
        mlflow.set_tags({"suite": suite_name, "node_name": platform.node()})
        mlflow.log_params(config.to_dict())
        mlflow.log_metrics(_summary_metrics(report))
        if artifact is not None:
            mlflow.log_artifact(str(artifact), artifact_path="counts")

        print(f"[MLflow] Logged run: {config.run_name} (suite: {suite_name})")
        print(f"[MLflow] Run ID: {run.info.run_id}")
        return run.info.run_id


def _summary_metrics(report: RenderReport) -> Dict[str, float]:
    # max_escape is None when nothing escaped; MLflow metrics must be numeric.
    return {key: float(value) for key, value in report.summary().items() if value is not None}
