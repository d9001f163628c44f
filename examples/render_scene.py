#!/usr/bin/env python3
"""Render a scene to a PNG file.

This script renders either the built-in reference scene or a scene loaded
from JSON, using all available CPU cores by default.

Usage:
    python examples/render_scene.py [options]

Options:
    --width WIDTH           Image width in pixels (default: 1023)
    --height HEIGHT         Image height in pixels (default: 767)
    --ao-samples N          Ambient occlusion rays per hit (default: 16)
    --ao-cutoff DIST        Ambient occlusion distance cutoff (default: 50)
    --max-depth DEPTH       Maximum reflection depth (default: 5)
    --workers N             Render threads (default: CPU count)
    --seed SEED             Fixed seed for reproducible noise
    --scene FILE            Load the scene from a JSON file
    --mesh FILE             Add an OBJ mesh to the built-in scene
    --random-spheres N      Add N random spheres to the built-in scene
    --output OUTPUT         Output file path (default: image.png)
    --preview               Show the result in a Matplotlib window
    --verbose               Enable debug logging
    --quiet                 Suppress progress output

Example:
    python examples/render_scene.py --width 320 --height 240 --ao-samples 8
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from aotracer.core.config import DEFAULT_HEIGHT, DEFAULT_WIDTH, RenderConfig
from aotracer.core.scheduler import RenderScheduler
from aotracer.preview.export import save_png
from aotracer.scene import Scene, create_default_scene


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = RenderConfig()
    parser = argparse.ArgumentParser(
        description="Render a scene with ambient occlusion.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "--ao-samples",
        type=int,
        default=defaults.ao_samples,
        help=f"Ambient occlusion rays per hit (default: {defaults.ao_samples})",
    )
    parser.add_argument(
        "--ao-cutoff",
        type=float,
        default=defaults.ao_cutoff,
        help=f"Ambient occlusion distance cutoff (default: {defaults.ao_cutoff})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=defaults.max_depth,
        help=f"Maximum reflection depth (default: {defaults.max_depth})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Render threads (default: CPU count)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Fixed seed for reproducible ambient occlusion noise",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="Load the scene from a JSON file instead of the built-in scene",
    )
    parser.add_argument(
        "--mesh",
        type=str,
        default=None,
        help="OBJ mesh to add to the built-in scene",
    )
    parser.add_argument(
        "--random-spheres",
        type=int,
        default=0,
        help="Random spheres to add to the built-in scene (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.png",
        help="Output file path (default: image.png)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Apply command-line overrides to the default configuration."""
    return replace(
        RenderConfig(),
        width=args.width,
        height=args.height,
        ao_samples=args.ao_samples,
        ao_cutoff=args.ao_cutoff,
        max_depth=args.max_depth,
        workers=args.workers,
        seed=args.seed,
    )


def build_scene(args: argparse.Namespace) -> Scene:
    """Load the JSON scene or assemble the built-in one."""
    if args.scene is not None:
        return Scene.from_json(args.scene)
    return create_default_scene(mesh_path=args.mesh, random_spheres=args.random_spheres)


def render(args: argparse.Namespace) -> Path:
    """Render the scene described by the arguments and save it.

    Returns:
        Path to the saved image file.
    """
    config = build_config(args)
    quiet = args.quiet

    if not quiet:
        print(f"Building scene ({config.width}x{config.height})...")
    scene = build_scene(args)

    if not quiet:
        print(
            f"Rendering {len(scene)} primitives on {config.worker_count} workers "
            f"({config.ao_samples} AO samples)..."
        )

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        elapsed = time.time() - start_time
        progress_pct = (current / total) * 100 if total > 0 else 0
        rows_per_sec = current / elapsed if elapsed > 0 else 0
        print(
            f"\r  Progress: {current}/{total} rows "
            f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
            end="",
            flush=True,
        )

    scheduler = RenderScheduler(
        scene,
        config,
        progress=None if quiet else progress_callback,
    )
    framebuffer = scheduler.render()

    if not quiet:
        print()  # Newline after progress

    output_file = save_png(framebuffer, args.output)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if args.preview:
        from aotracer.preview.display import show_preview

        show_preview(framebuffer)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render(args)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
