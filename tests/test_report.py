"""Tests for render reports, result dumps and timing helpers."""

import numpy as np
import pytest

from mandelbrot.config import default_render_config
from mandelbrot.execution import render_config
from mandelbrot.report import RenderReport, load_counts, save_report
from mandelbrot.timing import time_function, timer


@pytest.fixture
def small_config():
    return default_render_config(image_size="2x2", upper_left=-1.5 + 1.5j, lower_right=1.5 - 1.5j, limit=100)


def test_report_summary(small_config):
    report = render_config(small_config)
    summary = report.summary()

    # The bottom row is -1.5 on the real axis and the origin, both bounded.
    assert summary["pixels"] == 4
    assert summary["escaped"] == report.escaped == 2
    assert summary["bounded"] == report.bounded == 2
    assert summary["max_escape"] == report.max_escape == 2
    assert summary["wall_time"] >= 0.0


def test_report_without_escapes():
    counts = np.ma.masked_all((2, 3), dtype=np.int64)
    report = RenderReport(counts)
    assert report.escaped == 0
    assert report.bounded == 6
    assert report.max_escape is None
    assert report.summary()["wall_time"] == 0.0


def test_save_and_load_counts(tmp_path, small_config):
    report = render_config(small_config)
    path = save_report(report, small_config, tmp_path / "nested" / "counts.npz")

    assert path.exists()
    loaded = load_counts(path)
    np.testing.assert_array_equal(np.ma.getmaskarray(loaded), np.ma.getmaskarray(report.counts))
    np.testing.assert_array_equal(loaded.filled(-1), report.counts.filled(-1))

    with np.load(path) as data:
        assert int(data["width"]) == 2
        assert int(data["height"]) == 2
        assert str(data["upper_left"]) == "-1.5,1.5"
        assert str(data["lower_right"]) == "1.5,-1.5"
        assert int(data["limit"]) == 100
        assert data["counts"][1, 1] == -1
        assert not data["escaped_mask"][1, 1]
        assert int(data["escaped"]) == 2
        assert int(data["bounded"]) == 2
        assert int(data["max_escape"]) == 2
        assert float(data["wall_time"]) >= 0.0


def test_save_report_omits_missing_max_escape(tmp_path, small_config):
    report = RenderReport(np.ma.masked_all((2, 2), dtype=np.int64))
    path = save_report(report, small_config, tmp_path / "bounded.npz")
    with np.load(path) as data:
        assert "max_escape" not in data.files
        assert int(data["bounded"]) == 4
    assert load_counts(path).mask.all()


def test_timer_and_time_function():
    with timer() as elapsed:
        first = elapsed()
        second = elapsed()
    assert 0.0 <= first <= second

    result, duration = time_function(sum, [1, 2, 3])
    assert result == 6
    assert duration >= 0.0
