"""Baseline Mandelbrot implementation."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .computation import _check_bounds, escape_time, pixel_to_point


def render_reference(
    bounds: Tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    limit: int,
) -> np.ma.MaskedArray:
    """Render escape counts pixel by pixel with the pure-Python functions."""
    width, height = _check_bounds(bounds)
    counts = np.ma.masked_all((height, width), dtype=np.int64)
    counts.fill_value = -1

    for row in range(height):
        for column in range(width):
            point = pixel_to_point(bounds, (column, row), upper_left, lower_right)
            count = escape_time(point, limit)
            if count is not None:
                counts[row, column] = count

    return counts
