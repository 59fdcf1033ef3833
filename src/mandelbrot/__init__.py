"""Mandelbrot escape-time core with pixel-to-plane mapping and render tooling."""

__version__ = "2.0.0"

# Parsing and config - lightweight, no numba import
from .parsing import PairParseError, parse_complex, parse_pair, split_complex, split_pair
from .config import (
    RenderConfig,
    default_render_config,
    get_config_by_index,
    load_named_sweep_configs,
    load_sweep_configs,
)
from .report import RenderReport


# Conditional imports - only loaded when needed
def __getattr__(name):
    """Lazy loading of the numba-backed modules."""
    if name in {"ESCAPE_RADIUS_SQUARED", "escape_time", "pixel_to_point", "render"}:
        from . import computation

        return getattr(computation, name)
    elif name == "render_reference":
        from .baseline import render_reference

        return render_reference
    elif name == "render_config":
        from .execution import render_config

        return render_config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ESCAPE_RADIUS_SQUARED",
    "PairParseError",
    "RenderConfig",
    "RenderReport",
    "default_render_config",
    "escape_time",
    "get_config_by_index",
    "load_named_sweep_configs",
    "load_sweep_configs",
    "parse_complex",
    "parse_pair",
    "pixel_to_point",
    "render",
    "render_config",
    "render_reference",
    "split_complex",
    "split_pair",
]
