"""Command-line front end: render a demo scene to PPM (or PNG).

Usage:
    raycaster [options]
    python -m raycaster [options]

Options:
    --width WIDTH           Image width in pixels (default: 800)
    --height HEIGHT         Image height in pixels (default: 600)
    --scene N               Demo scene number (default: 1)
    --brightness B          Light intensity multiplier (default: 1.0)
    --fov DEGREES           Vertical field of view (default: 45.0)
    --output PATH           Output file; PPM on stdout when omitted
    --aa N                  Accepted for compatibility, has no effect
    --reflect               Accepted for compatibility, has no effect
    --mt                    Accepted for compatibility, has no effect
    --arch {cpu,gpu}        Taichi backend (default: cpu)
    --quiet                 Suppress status output

Status lines go to stderr so the image can be piped from stdout.

Example:
    raycaster --scene 3 --width 320 --height 240 > scene3.ppm
    raycaster --scene 4 --output scene4.png
"""

from __future__ import annotations

import argparse
import contextlib
import os
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

# Keep stdout free of the Taichi banner so it can carry the image
os.environ.setdefault("ENABLE_TAICHI_HEADER_PRINT", "False")

import taichi as ti  # noqa: E402

_ARCHS = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
}


@dataclass(frozen=True)
class RenderConfig:
    """Options collected from the command line.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        scene: Demo scene number.
        brightness: Multiplier applied to every light intensity.
        fov: Vertical field of view in degrees.
        output: Output path, or None for PPM on stdout.
        aa: Supersampling factor (accepted, not used).
        reflect: Mirror reflection switch (accepted, not used).
        mt: Multi-threading switch (accepted, not used).
        arch: Taichi backend name.
        quiet: Suppress status output.
    """

    width: int = 800
    height: int = 600
    scene: int = 1
    brightness: float = 1.0
    fov: float = 45.0
    output: str | None = None
    aa: int | None = None
    reflect: bool = False
    mt: bool = False
    arch: str = "cpu"
    quiet: bool = False

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def inert_options(self) -> list[str]:
        """Names of the options that were given but have no effect."""
        names = []
        if self.aa is not None:
            names.append(f"--aa {self.aa}")
        if self.reflect:
            names.append("--reflect")
        if self.mt:
            names.append("--mt")
        return names


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="raycaster",
        description="A ray caster that outputs PPM images.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Image width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Image height in pixels (default: 600)",
    )
    parser.add_argument(
        "--scene",
        type=int,
        default=1,
        help="Demo scene number, 1-4 (default: 1)",
    )
    parser.add_argument(
        "--brightness",
        type=float,
        default=1.0,
        help="Light intensity multiplier (default: 1.0)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=45.0,
        help="Vertical field of view in degrees (default: 45.0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file path, .png for PNG (default: PPM on stdout)",
    )
    parser.add_argument(
        "--aa",
        type=int,
        default=None,
        help="Anti-aliasing samples (accepted, has no effect)",
    )
    parser.add_argument(
        "--reflect",
        action="store_true",
        help="Enable reflections (accepted, has no effect)",
    )
    parser.add_argument(
        "--mt",
        action="store_true",
        help="Enable multi-threading (accepted, has no effect)",
    )
    parser.add_argument(
        "--arch",
        choices=sorted(_ARCHS),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress status output",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> RenderConfig:
    """Parse command-line arguments into a RenderConfig."""
    args = build_parser().parse_args(argv)
    return RenderConfig(
        width=args.width,
        height=args.height,
        scene=args.scene,
        brightness=args.brightness,
        fov=args.fov,
        output=args.output,
        aa=args.aa,
        reflect=args.reflect,
        mt=args.mt,
        arch=args.arch,
        quiet=args.quiet,
    )


def _status(message: str, quiet: bool) -> None:
    if not quiet:
        print(message, file=sys.stderr)


def render_demo(config: RenderConfig, stdout: TextIO | None = None) -> Path | None:
    """Render the configured demo scene and write it out.

    Taichi must already be initialized.

    Args:
        config: Render options.
        stdout: Stream receiving the PPM when no output path is set
            (default: sys.stdout).

    Returns:
        Path of the written file, or None when the image went to stdout.

    Raises:
        ValueError: If the image size or scene parameters are invalid.
        OSError: If the output cannot be written.
    """
    if config.width <= 0 or config.height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {config.width}x{config.height}")

    # Lazy imports to allow Taichi initialization first
    from raycaster.core.renderer import Renderer
    from raycaster.output import save_png, write_ppm
    from raycaster.scene.demo import create_demo_scene

    for option in config.inert_options():
        print(f"Warning: {option} is accepted but has no effect", file=sys.stderr)

    scene, camera = create_demo_scene(
        config.scene,
        aspect_ratio=config.aspect_ratio,
        brightness=config.brightness,
        fov=config.fov,
    )
    _status(
        f"Rendering scene {config.scene} ({config.width}x{config.height}, "
        f"{len(scene.primitives)} primitives, {len(scene.lights)} lights)...",
        config.quiet,
    )

    start_time = time.time()
    pixels = Renderer().render(scene, camera, config.width, config.height)
    _status(f"Render time: {time.time() - start_time:.2f}s", config.quiet)

    if config.output is None:
        write_ppm(pixels, stdout if stdout is not None else sys.stdout)
        return None

    output_file = Path(config.output)
    if output_file.suffix.lower() == ".png":
        save_png(pixels, output_file)
    else:
        write_ppm(pixels, output_file)
    _status(f"Saved to: {output_file.absolute()}", config.quiet)
    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    config = parse_args(argv)

    # ti.init prints its startup line to stdout, which may carry the image
    with contextlib.redirect_stdout(sys.stderr):
        ti.init(arch=_ARCHS[config.arch], log_level=ti.WARN)
    _status(f"Using {config.arch.upper()} backend", config.quiet)

    try:
        render_demo(config)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
