import argparse
import logging
import math
import sys

from .app import render_snapshot, run_window
from .config import ConfigError, SceneConfig


def parse_args(argv=None):
    """CLI argument parser."""
    epilog = """\
examples:
  %(prog)s                                   Open the window at default speed
  %(prog)s --speed 101 --ring-segments 32    Fast orbit, coarse ring
  %(prog)s --snapshot frame.png --frames 90  Render one frame headless
  %(prog)s --snapshot top.png --angle 1.57   Snapshot at a fixed orbit angle
"""
    parser = argparse.ArgumentParser(
        prog="pyramid-orbit",
        description="Orbiting-camera grid, ring and pyramid renderer",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--width", type=int, default=800, help="Viewport width in pixels")
    parser.add_argument("--height", type=int, default=600, help="Viewport height in pixels")
    parser.add_argument("--speed", type=float, default=None,
                        help="Initial orbit speed, 1..101 (default: 35)")
    parser.add_argument("--radius", type=float, default=4.0, help="Orbit radius")
    parser.add_argument("--orbit-height", type=float, default=1.0, help="Camera height above the floor")
    parser.add_argument("--ring-segments", type=int, default=120,
                        help="Number of chords approximating the orbit ring")
    parser.add_argument("--snapshot", metavar="PATH", default=None,
                        help="Render one frame without a window and save it to PATH")
    parser.add_argument("--frames", type=int, default=0,
                        help="Animator ticks to advance before the snapshot")
    parser.add_argument("--angle", type=float, default=0.0,
                        help="Starting orbit angle in radians")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log = logging.getLogger("pyramid_orbit")

    try:
        config = SceneConfig(
            orbit_radius=args.radius,
            orbit_height=args.orbit_height,
            ring_segments=args.ring_segments,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not math.isfinite(args.angle):
        print(f"Error: --angle must be finite, got {args.angle}", file=sys.stderr)
        return 2

    if args.snapshot:
        try:
            path = render_snapshot(config, args.width, args.height, args.snapshot,
                                   frames=args.frames, angle=args.angle,
                                   speed_value=args.speed)
        except (RuntimeError, OSError) as e:
            log.error("snapshot failed: %s", e)
            return 1
        print(path)
        return 0

    run_window(config, args.width, args.height, speed_value=args.speed)
    return 0
