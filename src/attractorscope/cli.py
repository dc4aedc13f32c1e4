"""
CLI entry point for rendering attractor trails.

Usage:
    attractorscope [options]
    python -m attractorscope [options]

A ``.png`` output renders a still of the trail after ``--steps`` integration
steps; an ``.mp4`` output renders ``--frames`` animation frames through ffmpeg.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from attractorscope.engine import EngineConfig, EngineError, Model, SimulationController
from attractorscope.engine.integrator import INTEGRATORS
from attractorscope.logging_config import setup_logging
from attractorscope.render.encoder import QUALITY_PRESETS, encode_video
from attractorscope.render.preview import RenderConfig, TrailRenderer, save_png

logger = logging.getLogger(__name__)


def _progress(unit: str, width: int = 30) -> Callable[[int, int], None]:
    """Build a progress callback that counts ``unit``s on stdout.

    A terminal gets one redrawn bar; pipes and logs get a line every 5%.
    """

    def report(current: int, total: int) -> None:
        frac = min(current / max(total, 1), 1.0)
        if sys.stdout.isatty():
            bar = "=" * int(width * frac)
            sys.stdout.write(f"\r  [{bar:<{width}}] {current}/{total} {unit}")
            if current >= total:
                sys.stdout.write("\n")
            sys.stdout.flush()
        elif current >= total or current % max(1, total // 20) == 0:
            print(f"  {frac:6.1%}  {current}/{total} {unit}", flush=True)

    return report


def positive_int(text: str) -> int:
    """argparse type for counts and sizes that must be at least 1."""
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {text}")
    return value


def parse_param(text: str) -> Tuple[str, str]:
    """Split a ``name=value`` assignment."""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected name=value, got {text!r}")
    return name.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="attractorscope",
        description="Render strange-attractor trails to PNG stills or MP4 videos",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output .png or .mp4 path (default: <model>.png)",
    )

    # Simulation
    parser.add_argument(
        "-m", "--model", type=str, default="lorenz",
        choices=[m.value for m in Model],
        help="Attractor system (default: lorenz)",
    )
    parser.add_argument(
        "-P", "--param", type=parse_param, action="append", default=[],
        metavar="NAME=VALUE",
        help="Override a model coefficient, e.g. --param rho=99 (repeatable)",
    )
    parser.add_argument(
        "--steps", type=int, default=10000,
        help="Integration steps before a still is taken (default: 10000)",
    )
    parser.add_argument(
        "--capacity", type=int, default=10000,
        help="Trail buffer capacity in points (default: 10000)",
    )
    parser.add_argument(
        "--integrator", type=str, default="rk4", choices=list(INTEGRATORS),
        help="Integration method (default: rk4)",
    )
    parser.add_argument(
        "--aizawa-scaled", action="store_true",
        help="Run aizawa in display units magnified 10x",
    )

    # Video
    parser.add_argument("--frames", type=positive_int, default=600, help="Frames for .mp4 output (default: 600)")
    parser.add_argument(
        "--steps-per-frame", type=positive_int, default=5,
        help="Integration steps per video frame (default: 5)",
    )
    parser.add_argument(
        "-q", "--quality", type=str, default="medium",
        choices=list(QUALITY_PRESETS),
        help="Encoding quality (default: medium)",
    )

    # Picture
    parser.add_argument("--width", type=positive_int, default=960, help="Image width (default: 960)")
    parser.add_argument("--height", type=positive_int, default=720, help="Image height (default: 720)")
    parser.add_argument("-f", "--fps", type=positive_int, default=60, help="Frames per second (default: 60)")
    parser.add_argument("--azimuth", type=float, default=0.6, help="Camera azimuth in radians")
    parser.add_argument("--elevation", type=float, default=0.35, help="Camera elevation in radians")
    parser.add_argument(
        "--rotation-speed", type=float, default=0.0,
        help="Camera azimuth drift in rad/s for videos (default: 0)",
    )
    parser.add_argument("--brightness", type=float, default=1.0, help="Point brightness multiplier")
    parser.add_argument("--no-glow", action="store_true", help="Disable glow")
    parser.add_argument("--no-vignette", action="store_true", help="Disable vignette")

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    output = args.output or Path(f"{args.model}.png")
    suffix = output.suffix.lower()
    if suffix not in (".png", ".mp4"):
        print(f"Error: unsupported output type {output.suffix!r} (use .png or .mp4)", file=sys.stderr)
        return 1

    # Step 1: Engine
    try:
        controller = SimulationController(
            EngineConfig(
                capacity=args.capacity,
                model=args.model,
                integrator=args.integrator,
                aizawa_scaled=args.aizawa_scaled,
                strict=True,
            )
        )
        for name, value in args.param:
            controller.set_parameter(controller.model, name, value)
    except (EngineError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    params = controller.parameters()
    print(f"Model: {controller.model}  {params}")

    render_cfg = RenderConfig(
        width=args.width,
        height=args.height,
        fps=args.fps,
        steps_per_frame=args.steps_per_frame,
        azimuth=args.azimuth,
        elevation=args.elevation,
        rotation_speed=args.rotation_speed,
        point_brightness=args.brightness,
        glow_enabled=not args.no_glow,
        vignette_strength=0.0 if args.no_vignette else 0.25,
    )
    renderer = TrailRenderer(render_cfg)

    t0 = time.time()

    # Step 2: Render
    if suffix == ".png":
        print(f"Integrating {args.steps} steps")
        report = _progress("steps")
        chunk = max(1, args.steps // 100)
        done = 0
        while done < args.steps:
            n = min(chunk, args.steps - done)
            controller.run(n)
            done += n
            report(done, args.steps)

        if controller.is_diverged():
            logger.warning("Trajectory diverged; the still may be empty")

        save_png(renderer.render_controller(controller), output)
    else:
        print(f"\nRendering {args.frames} frames at {args.width}x{args.height} @ {args.fps}fps")
        try:
            encode_video(
                frame_iterator=renderer.render_frames(controller, args.frames),
                output_path=output,
                width=args.width,
                height=args.height,
                fps=args.fps,
                quality=args.quality,
                total_frames=args.frames,
                progress_callback=_progress("frames"),
            )
        except RuntimeError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    elapsed = time.time() - t0
    file_size_kb = output.stat().st_size / 1024

    print(f"\nDone! {file_size_kb:.1f} KB")
    print(f"  Took {elapsed:.1f}s, {controller.live_count} points in trail")
    print(f"  Output: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
