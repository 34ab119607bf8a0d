"""
Treegen - Procedural Tree Mesh Demo

Generates one tree mesh from the reference preset (or a JSON parameter
file), prints a summary, and optionally writes an OBJ file and a PNG
preview.

Usage:
    python main.py --seed 17 --levels 4 --obj tree.obj --render tree.png
"""

import argparse
import json
import logging
import sys

from treegen.api import load_params
from treegen.config import TreeParams
from treegen.logging_config import setup_logging
from treegen.mesh import write_obj
from treegen.tree import generate

PRESETS = {
    "default": TreeParams.default,
    "sapling": TreeParams.sapling,
    "windswept": TreeParams.windswept,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a procedural tree mesh.")
    parser.add_argument("--params", help="JSON file with tree parameters")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="default")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--random-seed", action="store_true",
                        help="Pick a random seed in [0, 1000)")
    parser.add_argument("--levels", type=int, help="Branching levels")
    parser.add_argument("--segments", type=int, help="Vertices per ring")
    parser.add_argument("--tree-steps", type=int, help="Trunk-extension steps")
    parser.add_argument("--twigs", action="store_true", help="Also emit twig quads")
    parser.add_argument("--obj", help="Write the mesh to this OBJ file")
    parser.add_argument("--render", help="Save a PNG preview to this file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def params_from_args(args: argparse.Namespace) -> TreeParams:
    """Preset or JSON file first, then command line overrides."""
    if args.params:
        with open(args.params, encoding="utf-8") as fh:
            params = load_params(json.load(fh))
    else:
        params = PRESETS[args.preset]()

    if args.seed is not None:
        params.set_seed(args.seed)
    if args.random_seed:
        params.reseed()
    if args.levels is not None:
        params.set_levels(args.levels)
    if args.segments is not None:
        params.set_segments(args.segments)
    if args.tree_steps is not None:
        params.set_tree_steps(args.tree_steps)
    return params


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    print("\n" + "=" * 60)
    print("  TREEGEN: Procedural Tree Mesh")
    print("=" * 60)

    params = params_from_args(args)
    print(f"Seed: {params.seed}  levels: {params.levels}  "
          f"segments: {params.segments}  tree_steps: {params.tree_steps}")

    mesh = generate(params, twigs=args.twigs)
    mesh.print_summary()

    if not mesh.is_valid():
        print("Mesh is invalid (non-finite vertices or bad indices); "
              "check the parameters.", file=sys.stderr)
        return 1

    if args.obj:
        write_obj(mesh, args.obj)
    if args.render:
        from treegen.visualization import save_mesh_render
        save_mesh_render(mesh, args.render, show_twigs=args.twigs)

    return 0


if __name__ == "__main__":
    sys.exit(main())
