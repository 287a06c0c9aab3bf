#!/usr/bin/env python3
"""Render the reference scene (or a scene loaded from JSON).

Usage:
    python -m examples.render_reference_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 1024)
    --height HEIGHT     Image height in pixels (default: 768)
    --fov DEGREES       Field of view in degrees (default: 60)
    --scene PATH        JSON scene file (default: the reference scene)
    --output OUTPUT     Output file path (default: out.ppm)
    --arch {cpu,gpu}    Taichi backend (default: gpu, falls back to cpu)
    --quiet             Suppress progress output

Example:
    python -m examples.render_reference_scene --width 512 --height 384 --output out.png
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Image width in pixels (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=768,
        help="Image height in pixels (default: 768)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=60.0,
        help="Field of view in degrees (default: 60)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: the reference scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.ppm",
        help="Output file path (default: out.ppm)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="gpu",
        help="Taichi backend (default: gpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_scene(
    width: int = 1024,
    height: int = 768,
    fov_degrees: float = 60.0,
    scene_path: str | None = None,
    output_path: str = "out.ppm",
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Field of view in degrees.
        scene_path: Optional JSON scene file; the reference scene otherwise.
        output_path: Output file path.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.whitted.camera.pinhole import PinholeCamera
    from src.whitted.core.renderer import RenderConfig, Renderer
    from src.whitted.scene.description import load_scene
    from src.whitted.scene.reference import create_reference_scene

    camera = PinholeCamera(width=width, height=height, fov=math.radians(fov_degrees))
    if scene_path is None:
        scene, _ = create_reference_scene()
        if not quiet:
            print(f"Using reference scene ({width}x{height})...")
    else:
        scene = load_scene(scene_path)
        if not quiet:
            print(f"Loaded {scene_path} ({width}x{height})...")

    if not quiet:
        print(f"  {len(scene.spheres)} spheres, {len(scene.lights)} lights")

    start_time = time.time()
    renderer = Renderer(RenderConfig(scene=scene, camera=camera))

    if not quiet:
        print("Rendering...", end="", flush=True)
    renderer.render()
    if not quiet:
        print(f" done in {time.time() - start_time:.2f}s")

    output_file = Path(output_path)
    renderer.save_image(output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.arch == "gpu":
        # Use GPU if available, fall back to CPU
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")
    else:
        ti.init(arch=ti.cpu)

    try:
        render_scene(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            scene_path=args.scene,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
