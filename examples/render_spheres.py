#!/usr/bin/env python3
"""Render the procedural sphere-field scene.

This script renders the sphere field end to end: it builds the scene,
optionally loads a PFM light probe as the environment, traces one ray per
pixel row by row, and saves the result as a PNG.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 160)
    --height HEIGHT     Image height in pixels (default: 120)
    --spheres N         Number of spheres on the ring (default: 8)
    --seed SEED         Seed for scene layout and bounce rays (default: 0)
    --probe PATH        PFM light probe for rays that escape the scene
    --depth             Render distance to the nearest hit instead of shading
    --output OUTPUT     Output file path (default: spheres.png)
    --show              Open a Matplotlib preview when done
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_spheres --width 320 --height 240 --probe grace.pfm
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the procedural sphere-field scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=160,
        help="Image width in pixels (default: 160)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=120,
        help="Image height in pixels (default: 120)",
    )
    parser.add_argument(
        "--spheres",
        type=int,
        default=8,
        help="Number of spheres on the ring (default: 8)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for scene layout and bounce rays (default: 0)",
    )
    parser.add_argument(
        "--probe",
        type=str,
        default=None,
        help="PFM light probe for rays that escape the scene",
    )
    parser.add_argument(
        "--depth",
        action="store_true",
        help="Render distance to the nearest hit instead of shading",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a Matplotlib preview when done",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def render_spheres(
    width: int = 160,
    height: int = 120,
    num_spheres: int = 8,
    seed: int | None = 0,
    probe_path: str | None = None,
    depth_mode: bool = False,
    output_path: str = "spheres.png",
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the sphere-field scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        num_spheres: Number of diffuse spheres.
        seed: Seed for the scene layout and the bounce rays.
        probe_path: Optional PFM probe used as the environment.
        depth_mode: Render the depth visualization instead of shading.
        output_path: Output file path (PNG).
        show: Open a preview window after rendering.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.spheretrace.core.integrator import TracerSettings
    from src.spheretrace.core.progressive import RowRenderer
    from src.spheretrace.core.target import RenderTarget
    from src.spheretrace.environment import Lightmap, PFMImage
    from src.spheretrace.preview import save_png, show_preview
    from src.spheretrace.scene.generator import SphereFieldParams, create_sphere_field_scene

    environment = None
    if probe_path is not None:
        if not quiet:
            print(f"Loading light probe {probe_path}...")
        environment = Lightmap(PFMImage.load(probe_path))

    if not quiet:
        print(f"Creating sphere field ({num_spheres} spheres, {width}x{height})...")

    scene, camera = create_sphere_field_scene(
        SphereFieldParams(num_spheres=num_spheres, seed=seed),
        environment=environment,
        aspect_ratio=width / height,
    )

    target = RenderTarget(width, height)
    renderer = RowRenderer(
        scene,
        camera,
        target,
        TracerSettings(depth_mode=depth_mode, seed=seed),
    )

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (done / total) * 100 if total > 0 else 0
            casts_per_sec = renderer.cast_count / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows "
                f"({progress_pct:.1f}%) - {casts_per_sec:.0f} casts/s",
                end="",
                flush=True,
            )

    renderer.render(callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = save_png(target, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total casts: {renderer.cast_count:,}")
        print(f"Total time: {total_time:.2f}s")

    if show:
        show_preview(target, title=output_file.name, cast_count=renderer.cast_count)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    # Only the packing kernel runs in Taichi; the CPU backend is enough
    ti.init(arch=ti.cpu)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            num_spheres=args.spheres,
            seed=args.seed,
            probe_path=args.probe,
            depth_mode=args.depth,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
