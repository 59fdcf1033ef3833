"""Structured results returned from a render."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from .config import RenderConfig


@dataclass(frozen=True)
class RenderReport:
    """Container for outputs produced by ``render_config``."""

    counts: np.ma.MaskedArray
    timing: Dict[str, Any] = field(default_factory=dict)

    @property
    def escaped(self) -> int:
        return int(np.ma.count(self.counts))

    @property
    def bounded(self) -> int:
        return int(np.ma.count_masked(self.counts))

    @property
    def max_escape(self) -> Optional[int]:
        if self.escaped == 0:
            return None
        return int(self.counts.max())

    def summary(self) -> Dict[str, Any]:
        return {
            "pixels": int(self.counts.size),
            "escaped": self.escaped,
            "bounded": self.bounded,
            "max_escape": self.max_escape,
            "wall_time": float(self.timing.get("wall_time", 0.0)),
        }


def save_report(report: RenderReport, config: RenderConfig, path: str | Path) -> Path:
    """Write raw escape counts to ``path`` (``.npz``).

    Alongside ``counts`` (bounded pixels filled with -1) and ``escaped_mask``,
    the archive holds every ``config.to_dict()`` field and every non-None
    ``report.summary()`` entry as a scalar array.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    summary = {key: value for key, value in report.summary().items() if value is not None}
    with open(path, "wb") as f:
        np.savez(
            f,
            counts=report.counts.filled(-1),
            escaped_mask=~np.ma.getmaskarray(report.counts),
            **config.to_dict(),
            **summary,
        )
    return path


def load_counts(path: str | Path) -> np.ma.MaskedArray:
    """Read the escape counts written by ``save_report``."""
    with np.load(path) as data:
        counts = data["counts"]
        escaped = data["escaped_mask"]
    return np.ma.masked_array(counts, mask=~escaped, fill_value=-1)
