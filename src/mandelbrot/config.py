"""Configuration objects and YAML loading for Mandelbrot renders."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from itertools import product
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import yaml

from .parsing import PairParseError, split_complex, split_pair


@dataclass(frozen=True)
class RenderConfig:
    """Image size, plane rectangle and iteration limit of a single render."""

    width: int
    height: int
    upper_left: complex
    lower_right: complex
    limit: int = 255

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")
        if self.limit < 0:
            raise ValueError(f"limit must be non-negative, got {self.limit}")

    @property
    def bounds(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def image_size(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def run_name(self) -> str:
        """Generate unique run name embedding all parameters."""
        return (
            f"{self.image_size}_ul{format_complex(self.upper_left)}_"
            f"lr{format_complex(self.lower_right)}_l{self.limit}"
        )

    def to_dict(self) -> dict:
        """Plain-value mapping, corners written as ``"re,im"`` strings."""
        return {
            "width": self.width,
            "height": self.height,
            "upper_left": format_complex(self.upper_left),
            "lower_right": format_complex(self.lower_right),
            "limit": self.limit,
        }


DEFAULT_RENDER_CONFIG = RenderConfig(
    width=1000,
    height=750,
    upper_left=complex(-1.20, 0.35),
    lower_right=complex(-1.0, 0.20),
    limit=255,
)

_FIELD_NAMES = {f.name for f in fields(RenderConfig)}


def default_render_config(**overrides: object) -> RenderConfig:
    """Return the canonical default config optionally overridden with kwargs."""
    return replace(DEFAULT_RENDER_CONFIG, **_coerce_fields(overrides))


def format_complex(value: complex) -> str:
    return f"{value.real!r},{value.imag!r}"


def parse_image_size(value: str) -> Tuple[int, int]:
    try:
        return split_pair(value.lower(), "x", int)
    except PairParseError as exc:
        raise ValueError(f"Invalid image size {value!r}: {exc.reason}") from exc


def load_sweep_configs(yaml_path: str | Path) -> List[RenderConfig]:
    """Load YAML config and generate all parameter sweep combinations.

    Supports a top-level ``sweep`` as well as the format that nests several
    named experiments under ``experiments``.
    """
    with open(yaml_path) as f:
        cfg = yaml.safe_load(f) or {}

    global_defaults: Dict[str, object] = cfg.get("defaults", {}) or {}

    if "experiments" in cfg:
        configs: List[RenderConfig] = []
        for exp in cfg.get("experiments") or []:
            exp_defaults = {**global_defaults, **(exp.get("defaults", {}) or {})}
            configs.extend(_expand_sweep(exp_defaults, exp.get("sweep") or {}))
        return configs

    sweep: Dict[str, object] = cfg.get("sweep", {}) or {}
    return _expand_sweep(global_defaults, sweep)


def load_named_sweep_configs(
    yaml_path: str | Path,
    suite: str | None = None,
) -> List[tuple[str, List[RenderConfig]]]:
    with open(yaml_path) as f:
        cfg = yaml.safe_load(f) or {}

    defaults: Dict[str, object] = cfg.get("defaults", {}) or {}
    experiments = cfg.get("experiments")
    results: List[tuple[str, List[RenderConfig]]] = []

    if experiments:
        for exp in experiments:
            name = exp.get("name")
            if not name:
                continue
            if suite and name != suite:
                continue
            sweep = exp.get("sweep") or {}
            exp_defaults = {**defaults, **(exp.get("defaults", {}) or {})}
            results.append((name, _expand_sweep(exp_defaults, sweep)))
        if suite and not results:
            raise ValueError(f"Suite '{suite}' not found in {yaml_path}")
        return results

    sweep: Dict[str, object] = cfg.get("sweep", {}) or {}
    label = cfg.get("name") or Path(yaml_path).stem
    return [(label, _expand_sweep(defaults, sweep))]


def get_config_by_index(yaml_path: str | Path, index: int) -> RenderConfig:
    """Get a specific config by index from sweep."""
    configs = load_sweep_configs(yaml_path)
    if index < 0 or index >= len(configs):
        raise ValueError(f"Config index {index} out of range [0, {len(configs) - 1}]")
    return configs[index]


def _build_render_config(raw_data: Dict[str, object]) -> RenderConfig:
    data = _coerce_fields(raw_data)
    missing = _FIELD_NAMES - set(data) - {"limit"}
    if missing:
        raise ValueError(f"Missing config fields: {', '.join(sorted(missing))}")
    return RenderConfig(**data)  # type: ignore[arg-type]


def _expand_sweep(defaults: Dict[str, object], sweep: Dict[str, object]) -> List[RenderConfig]:
    """Expand sweep definition into RenderConfig instances."""
    configs: List[RenderConfig] = []

    if not isinstance(sweep, dict):
        raise ValueError(f"Sweep must be a mapping of parameter lists, got {sweep!r}")
    regions = sweep.get("regions")
    param_grid = {k: sweep[k] for k in sweep if k not in {"regions", "image_shape"}}
    shape_options = sweep.get("image_shape")
    keys = list(param_grid.keys())

    for key, values in [*param_grid.items(), ("regions", regions)]:
        if values is not None and not isinstance(values, (list, tuple)):
            raise ValueError(f"Sweep entry '{key}' must be a list, got {values!r}")

    if regions:
        for region in regions:
            upper_left, lower_right = _normalize_region_entry(region)
            for combo in product(*[param_grid[k] for k in keys]):
                data = {**defaults, **dict(zip(keys, combo))}
                data["upper_left"] = upper_left
                data["lower_right"] = lower_right
                configs.extend(_expand_shapes(data, shape_options))
    else:
        for combo in product(*[param_grid[k] for k in keys]):
            data = {**defaults, **dict(zip(keys, combo))}
            configs.extend(_expand_shapes(data, shape_options))

    return configs


def _coerce_fields(data: Dict[str, object]) -> Dict[str, object]:
    result = dict(data)
    for key in ("image_size", "image_shape"):
        shape = result.pop(key, None)
        if shape is not None:
            width, height = _normalize_shape_entry(shape)
            result.setdefault("width", width)
            result.setdefault("height", height)

    unknown = set(result) - _FIELD_NAMES
    if unknown:
        raise ValueError(f"Unknown config fields: {', '.join(sorted(unknown))}")

    for key in ("width", "height", "limit"):
        if key in result:
            try:
                result[key] = int(result[key])  # type: ignore[call-overload]
            except TypeError as exc:
                raise ValueError(f"Config field '{key}' must be an integer, got {result[key]!r}") from exc
    for key in ("upper_left", "lower_right"):
        if key in result:
            result[key] = _normalize_point(result[key])
    return result


def _normalize_point(entry: object) -> complex:
    point = _to_complex(entry)
    if not (math.isfinite(point.real) and math.isfinite(point.imag)):
        raise ValueError(f"Invalid plane point {entry!r}: non-finite operand")
    return point


def _to_complex(entry: object) -> complex:
    if isinstance(entry, complex):
        return entry
    if isinstance(entry, (int, float)) and not isinstance(entry, bool):
        return complex(entry)
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        try:
            return complex(float(entry[0]), float(entry[1]))
        except TypeError as exc:
            raise ValueError(f"Invalid plane point {entry!r}: invalid operand") from exc
    if isinstance(entry, str):
        try:
            return split_complex(entry)
        except PairParseError as exc:
            raise ValueError(f"Invalid plane point {entry!r}: {exc.reason}") from exc
    raise ValueError(f"Unsupported plane point specification: {entry!r}")


def _normalize_region_entry(entry: object) -> Tuple[complex, complex]:
    if isinstance(entry, dict):
        upper_left = entry.get("upper_left")
        lower_right = entry.get("lower_right")
        if upper_left is None or lower_right is None:
            raise ValueError("region dict must include 'upper_left' and 'lower_right'")
        return _normalize_point(upper_left), _normalize_point(lower_right)
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        return _normalize_point(entry[0]), _normalize_point(entry[1])
    raise ValueError(f"Unsupported region specification: {entry!r}")


def _normalize_shape_entry(entry: object) -> Tuple[int, int]:
    if isinstance(entry, dict):
        width = entry.get("width")
        height = entry.get("height")
        if width is None or height is None:
            raise ValueError("image_shape dict must include 'width' and 'height'")
        return int(width), int(height)
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        return int(entry[0]), int(entry[1])
    if isinstance(entry, str):
        return parse_image_size(entry)
    raise ValueError(f"Unsupported image shape specification: {entry!r}")


def _expand_shapes(base: Dict[str, object], shape_options: object) -> List[RenderConfig]:
    if not shape_options:
        return [_build_render_config(base)]

    shapes: Iterable[Tuple[int, int]]
    if isinstance(shape_options, (list, tuple)) and not _is_single_shape(shape_options):
        shapes = [_normalize_shape_entry(opt) for opt in shape_options]
    else:
        shapes = [_normalize_shape_entry(shape_options)]

    configs = []
    for width, height in shapes:
        data = {**base, "width": width, "height": height}
        configs.append(_build_render_config(data))
    return configs


def _is_single_shape(entry: object) -> bool:
    return (
        isinstance(entry, (list, tuple))
        and len(entry) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in entry)
    )
