"""Generate a circular maze and write its SVG / DXF files.

    python gen_maze.py --seed 38763 --difficulty 5 --format all --out build
"""
import argparse
import json
import logging
import os
import sys

from shared.types import Decoration
from shared.svg import fmt_num
from maze import InvalidConfiguration, config_from_mapping, default_config, generate
from export import (
    ParseError, default_filename, export_to_file, write_preview,
)

logger = logging.getLogger("gen_maze")

# CLI flag -> MazeConfig field
_FIELD_ARGS = [
    ("--diameter", "diameter", float),
    ("--wall-width", "wall_width", float),
    ("--corridor-width", "corridor_width", float),
    ("--difficulty", "difficulty", int),
    ("--seed", "seed", int),
    ("--hole-radius", "hole_radius", float),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Circular maze generator")
    for flag, field, typ in _FIELD_ARGS:
        parser.add_argument(flag, dest=field, type=typ, help=f"maze {field}")
    parser.add_argument("--corner-rounding", dest="corner_rounding",
                        action=argparse.BooleanOptionalAction,
                        help="round (default) or mitered corridor corners")
    parser.add_argument("--wedge", dest="show_entry_wedge",
                        action=argparse.BooleanOptionalAction,
                        help="add the removable entry wedge")
    parser.add_argument("--config", help="JSON file with config fields")
    parser.add_argument("--format", choices=["svg", "outline", "dxf", "all"], default="svg")
    parser.add_argument("--out", default=".", help="output directory")
    parser.add_argument("--solution", action="store_true",
                        help="overlay the solution path in the preview SVG")
    parser.add_argument("--decoration", help="JSON file {path, viewBox} drawn at the center hole")
    parser.add_argument("--title", help="preview SVG title text")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def load_config(args: argparse.Namespace):
    """Defaults, then --config JSON, then explicit flags."""
    cfg = default_config()
    if args.config:
        with open(args.config) as f:
            cfg = config_from_mapping(json.load(f), cfg)
    overrides = {}
    for _, field, _ in _FIELD_ARGS:
        if getattr(args, field) is not None:
            overrides[field] = getattr(args, field)
    for field in ("corner_rounding", "show_entry_wedge"):
        if getattr(args, field) is not None:
            overrides[field] = getattr(args, field)
    return config_from_mapping(overrides, cfg)


def load_decoration(path: str) -> Decoration:
    with open(path) as f:
        data = json.load(f)
    return Decoration(path=data["path"], view_box=data.get("viewBox", "0 0 24 24"))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
        model = generate(config)
    except InvalidConfiguration as e:
        logger.error("invalid configuration: %s", e)
        return 2

    os.makedirs(args.out, exist_ok=True)
    formats = ["svg", "outline", "dxf"] if args.format == "all" else [args.format]
    decoration = load_decoration(args.decoration) if args.decoration else None

    warnings = 0
    for fmt in formats:
        path = os.path.join(args.out, default_filename(config, fmt))
        if fmt == "svg":
            write_preview(model, path, show_solution=args.solution,
                          decoration=decoration, title=args.title)
        else:
            try:
                result = export_to_file(model, path, fmt)
            except ParseError as e:
                logger.error("export failed: %s", e)
                return 1
            warnings += len(result.warnings)
        print(f"{fmt} written to {path}")

    print(f"Rings:   {len(model.ring_sizes) - 1}")
    print(f"Nodes:   {len(model.nodes)}")
    sx, sy = (fmt_num(v) for v in model.start_point)
    print(f"Entry:   ({sx}, {sy})")
    if warnings:
        print(f"Warnings: {warnings} sub-paths dropped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
