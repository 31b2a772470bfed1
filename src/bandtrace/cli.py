"""Command line entry point for rendering a scene to an image file.

Renders the built-in sample scene, or a JSON scene file, with a pool of
worker threads and writes the result with Pillow.

Usage:
    bandtrace [options]
    python -m bandtrace [options]

Options:
    --width WIDTH       Image width in pixels (default: 200)
    --height HEIGHT     Image height in pixels (default: 100)
    --samples SAMPLES   Number of samples per pixel (default: 100)
    --max-depth DEPTH   Maximum bounces per path (default: 50)
    --threads THREADS   Worker threads (default: CPU count)
    --seed SEED         Root random seed (default: fresh entropy)
    --scene PATH        JSON scene file (default: built-in sample scene)
    --output OUTPUT     Output file path (default: out.png)
    --quiet             Suppress progress output
    --verbose           Log render details to stderr

Example:
    bandtrace --width 400 --height 200 --samples 50 --threads 8 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from bandtrace.core.integrator import MAX_DEPTH
from bandtrace.core.renderer import Renderer, RenderSettings
from bandtrace.errors import BandtraceError
from bandtrace.logconfig import setup_logging
from bandtrace.preview.export import save_image
from bandtrace.scene.manager import load_scene, sample_scene


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="bandtrace",
        description="Render a sphere scene with a multi-threaded path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=200,
        help="Image width in pixels (default: 200)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=100,
        help="Image height in pixels (default: 100)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100,
        help="Number of samples per pixel (default: 100)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        help=f"Maximum bounces per path (default: {MAX_DEPTH})",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Number of worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Root random seed; same seed and thread count give the same image",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in sample scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.png",
        help="Output file path (default: out.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log render details to stderr",
    )
    return parser.parse_args(argv)


def render_to_file(args: argparse.Namespace) -> Path:
    """Build the scene described by ``args``, render it and save the image.

    Returns:
        Path to the saved image file.

    Raises:
        BandtraceError: If the scene, render or output step fails.
        ValueError: If a render or camera parameter is out of range.
    """
    quiet = args.quiet
    description = load_scene(args.scene) if args.scene else sample_scene()

    settings_kwargs = {}
    if args.threads is not None:
        settings_kwargs["threads"] = args.threads
    settings = RenderSettings(
        width=args.width,
        height=args.height,
        samples=args.samples,
        max_depth=args.max_depth,
        seed=args.seed,
        **settings_kwargs,
    )
    camera = description.camera.build(settings.aspect)
    renderer = Renderer(description.build_world(), camera, settings)

    if not quiet:
        print(
            f"Rendering {settings.width}x{settings.height}, "
            f"{settings.samples} spp on {settings.threads} threads..."
        )

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        elapsed = time.time() - start_time
        progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
        print(
            f"\r  Progress: {rows_done}/{total_rows} rows "
            f"({progress_pct:.1f}%) - {elapsed:.1f}s",
            end="",
            flush=True,
        )

    pixels = renderer.run(callback=None if quiet else progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = save_image(pixels, args.output)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        render_to_file(args)
        return 0
    except (BandtraceError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
