"""Command-line entry point for Mandelbrot escape-count renders."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .config import default_render_config, load_named_sweep_configs
from .execution import run_single_render, run_sweep
from .parsing import PairParseError, split_complex, split_pair


def _image_size(text: str) -> Tuple[int, int]:
    try:
        return split_pair(text, "x", int)
    except PairParseError as exc:
        raise argparse.ArgumentTypeError(f"invalid image size {text!r}: {exc.reason}") from exc


def _plane_point(text: str) -> complex:
    try:
        return split_complex(text)
    except PairParseError as exc:
        raise argparse.ArgumentTypeError(f"invalid plane point {text!r}: {exc.reason}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mandelbrot",
        description="Compute Mandelbrot escape counts for a rectangle of the complex plane.",
        epilog="Negative corners must be attached with '=', e.g. --upper-left=-1.20,0.35",
    )
    parser.add_argument("--sweep", type=str, help="Path to sweep YAML file")
    parser.add_argument("--suite", type=str, help="Name of suite/experiment within sweep file")
    parser.add_argument("--list-suites", action="store_true", help="List suites in sweep file")
    parser.add_argument("--task-id", type=int, help="Run specific config index")
    parser.add_argument("--output-dir", type=Path, help="Directory for sweep .npz results")

    parser.add_argument("--image-size", type=_image_size, metavar="WxH", help="Image size in pixels")
    parser.add_argument("--upper-left", type=_plane_point, metavar="RE,IM", help="Upper-left plane corner")
    parser.add_argument("--lower-right", type=_plane_point, metavar="RE,IM", help="Lower-right plane corner")
    parser.add_argument("--limit", type=int, help="Iteration limit (default 255)")
    parser.add_argument("--output", type=Path, help="Write escape counts to this .npz file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.suite and not args.sweep:
        parser.error("--suite requires --sweep")
    if args.task_id is not None and args.suite is None:
        parser.error("--task-id requires --suite")
    if args.list_suites and not args.sweep:
        parser.error("--list-suites requires --sweep")
    if args.output_dir is not None and not args.sweep:
        parser.error("--output-dir applies to sweep runs; use --output for a direct run")

    if args.sweep:
        direct_flags = [
            flag
            for flag, value in (
                ("--image-size", args.image_size),
                ("--upper-left", args.upper_left),
                ("--lower-right", args.lower_right),
                ("--limit", args.limit),
                ("--output", args.output),
            )
            if value is not None
        ]
        if direct_flags:
            parser.error(f"{', '.join(direct_flags)} cannot be combined with --sweep")

        sweep_path = Path(args.sweep)
        try:
            suites = load_named_sweep_configs(sweep_path, args.suite)
        except (OSError, ValueError) as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

        if args.list_suites:
            for name, configs in suites:
                print(f"{name}: {len(configs)} configurations")
            return 0

        exit_code = 0
        for suite_name, configs in suites:
            descriptor = f"{sweep_path}::{suite_name}"
            rc = run_sweep(configs, args.task_id, descriptor, args.output_dir, suite_name)
            exit_code = exit_code or rc
        return exit_code

    # Direct run - geometry is required, limit falls back to the default.
    if not all([args.image_size, args.upper_left is not None, args.lower_right is not None]):
        parser.error("direct run requires --image-size, --upper-left and --lower-right")

    overrides = {
        "image_size": args.image_size,
        "upper_left": args.upper_left,
        "lower_right": args.lower_right,
    }
    if args.limit is not None:
        overrides["limit"] = args.limit

    try:
        config = default_render_config(**overrides)
        run_single_render(config, args.output)
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
