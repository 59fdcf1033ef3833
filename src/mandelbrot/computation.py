from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numba import njit

__all__ = ["ESCAPE_RADIUS_SQUARED", "escape_time", "pixel_to_point", "render"]

# |z| > 2 tested as |z|^2 > 4 to avoid the square root.
ESCAPE_RADIUS_SQUARED = 4.0

# Kernel marker for "did not escape"; never leaves this module.
_BOUNDED = -1


def _check_bounds(bounds: Tuple[int, int]) -> Tuple[int, int]:
    width, height = bounds
    if width <= 0 or height <= 0:
        raise ValueError(f"image bounds must be positive, got {width}x{height}")
    return int(width), int(height)


def _check_limit(limit: int) -> int:
    if limit < 0:
        raise ValueError(f"iteration limit must be non-negative, got {limit}")
    return int(limit)


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Try to decide whether ``c`` is in the Mandelbrot set in at most ``limit`` iterations.

    Returns the iteration at which ``z`` left the circle of radius 2 around the
    origin, or ``None`` if it stayed inside for all ``limit`` iterations (``c``
    may be a member). ``limit == 0`` performs no iteration and returns ``None``.
    """
    limit = _check_limit(limit)
    c = complex(c)
    z = 0j
    for i in range(limit):
        if z.real * z.real + z.imag * z.imag > ESCAPE_RADIUS_SQUARED:
            return i
        z = z * z + c
    return None


def pixel_to_point(
    bounds: Tuple[int, int],
    pixel: Tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Return the point of the plane rectangle that ``pixel`` corresponds to.

    ``bounds`` is the image ``(width, height)`` and ``pixel`` a ``(column, row)``
    inside it. Rows grow downward while the imaginary axis grows upward, so row
    0 maps to ``upper_left.imag``. The corners are used as given.

    Raises:
        ValueError: Either bound is not positive.
    """
    bounds_width, bounds_height = _check_bounds(bounds)
    column, row = pixel
    width = lower_right.real - upper_left.real
    height = upper_left.imag - lower_right.imag
    return complex(
        upper_left.real + column * width / bounds_width,
        upper_left.imag - row * height / bounds_height,
    )


@njit
def _escape_count(c_re: float, c_im: float, limit: int) -> int:
    z_re = 0.0
    z_im = 0.0
    for i in range(limit):
        if z_re * z_re + z_im * z_im > ESCAPE_RADIUS_SQUARED:
            return i
        # Same operation order as complex z * z + c.
        z_re, z_im = z_re * z_re - z_im * z_im + c_re, z_re * z_im + z_im * z_re + c_im
    return _BOUNDED


@njit
def _render_counts(
    width: int,
    height: int,
    ul_re: float,
    ul_im: float,
    lr_re: float,
    lr_im: float,
    limit: int,
) -> np.ndarray:
    counts = np.empty((height, width), dtype=np.int64)
    plane_width = lr_re - ul_re
    plane_height = ul_im - lr_im
    for row in range(height):
        c_im = ul_im - row * plane_height / height
        for column in range(width):
            c_re = ul_re + column * plane_width / width
            counts[row, column] = _escape_count(c_re, c_im, limit)
    return counts


def render(
    bounds: Tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    limit: int,
) -> np.ma.MaskedArray:
    """Escape counts for every pixel, shape ``(height, width)``, masked where bounded."""
    width, height = _check_bounds(bounds)
    limit = _check_limit(limit)
    counts = _render_counts(
        width,
        height,
        float(upper_left.real),
        float(upper_left.imag),
        float(lower_right.real),
        float(lower_right.imag),
        limit,
    )
    return np.ma.masked_array(counts, mask=counts == _BOUNDED, fill_value=_BOUNDED)
