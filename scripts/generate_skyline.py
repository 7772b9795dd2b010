#!/usr/bin/env python3
"""
Generate a 3D-printable contribution skyline from calendar JSON files.

Usage:
    # One year
    python scripts/generate_skyline.py --user octocat --input 2024.json

    # Several years side by side, with an image relief next to the label
    python scripts/generate_skyline.py --user octocat \
        --input 2022.json 2023.json 2024.json --image logo.png

Each input file holds a contribution-calendar response
(``user.contributionsCollection.contributionCalendar.weeks``).
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skyline.contracts import LayoutPolicy, PeriodInput, SkylineConfig
from skyline.contributions import grid_year, grid_year_span, load_grid
from skyline.errors import SkylineError
from skyline.naming import format_year_range, generate_output_filename
from skyline.pipeline import generate_skyline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a skyline STL from contribution calendar data"
    )
    parser.add_argument("--user", required=True, help="Username printed on the label")
    parser.add_argument(
        "--input", nargs="+", required=True,
        help="Contribution calendar JSON file(s), one per period, in order",
    )
    parser.add_argument("--output", default=None, help="Output STL path (optional)")
    parser.add_argument("--image", default=None, help="Optional image for a relief plaque")
    parser.add_argument(
        "--image-max-size", type=int, default=None,
        help="Downsample the relief image to this many pixels on its longest side",
    )
    parser.add_argument("--font", default=None, help="TrueType font for the label")
    parser.add_argument(
        "--cell-size", type=float, default=2.5, help="Cell footprint in mm (default: 2.5)"
    )
    parser.add_argument(
        "--max-height", type=float, default=25.0,
        help="Height of the busiest days in mm (default: 25)",
    )
    parser.add_argument(
        "--merge-runs", action="store_true",
        help="Merge adjacent equal-height days into one block",
    )
    parser.add_argument("--workers", type=int, default=1, help="Parallel period builders")
    parser.add_argument("--until", default=None, help="End date (YYYY-MM-DD) of a trailing-year range")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    periods = []
    spans = []
    for path in args.input:
        grid = load_grid(path)
        year = grid_year(grid)
        periods.append(PeriodInput(grid=grid, label=str(year) if year else Path(path).stem))
        spans.append(grid_year_span(grid))

    # a trailing-twelve-months file spans two calendar years
    dated = [span for span in spans if span]
    if dated:
        start_year, end_year = dated[0][0], dated[-1][1]
        label = format_year_range(start_year, end_year)
    else:
        start_year = end_year = 0
        label = None
    output = generate_output_filename(
        args.user, start_year, end_year, custom_path=args.output, ytd_end=args.until,
    )

    try:
        config = SkylineConfig(
            username=args.user,
            output_path=output,
            layout=LayoutPolicy(
                voxel_scale=args.cell_size,
                max_height=args.max_height,
                padding=args.cell_size,
                merge_runs=args.merge_runs,
            ),
            font_path=args.font,
            range_label=label,
            image_path=args.image,
            image_max_size=args.image_max_size,
            max_workers=max(1, args.workers),
        )
        result = generate_skyline(periods, config)
    except SkylineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    print(f"Output: {result.output_path}")
    print(f"Triangles: {result.triangle_count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
