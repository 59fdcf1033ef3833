"""Test numerical correctness of the compiled renderer against the baseline."""

from pathlib import Path

import numpy as np
import pytest

from mandelbrot.baseline import render_reference
from mandelbrot.config import load_sweep_configs
from mandelbrot.execution import render_config

TEST_CONFIGS = load_sweep_configs(Path(__file__).parent / "test_configs.yaml")


@pytest.mark.parametrize("config", TEST_CONFIGS, ids=lambda c: c.run_name)
def test_render_matches_baseline(config):
    """Render a sweep config and compare to the pure-Python baseline."""
    report = render_config(config)
    baseline = render_reference(config.bounds, config.upper_left, config.lower_right, config.limit)

    assert report.counts.shape == (config.height, config.width)
    np.testing.assert_array_equal(
        report.counts.filled(-1),
        baseline.filled(-1),
        err_msg=f"Mismatch: {config.run_name}",
    )
    assert report.timing["wall_time"] >= 0.0
