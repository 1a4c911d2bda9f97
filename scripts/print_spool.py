#!/usr/bin/env python3
"""Generate G-code for the spiral-wound spool print."""

import argparse
import logging
import sys
import time
from dataclasses import replace

from spiralprint.config import DEFAULT_CONFIG
from spiralprint.errors import InvalidConfiguration, IOFailure
from spiralprint.gcode.library import preamble, purge_line, spool_job, spool_shapes
from spiralprint.gcode.writer import GCodeWriter
from spiralprint.printer.state import MotionParameters, MotionState


def main():
    parser = argparse.ArgumentParser(description="Generate spool G-code")
    parser.add_argument("output", help="Path of the .gcode file to write")
    parser.add_argument("--disc-diameter", type=float, default=DEFAULT_CONFIG.disc_diameter)
    parser.add_argument("--axle-diameter", type=float, default=DEFAULT_CONFIG.axle_diameter)
    parser.add_argument("--section-height", type=float, default=DEFAULT_CONFIG.section_height)
    parser.add_argument("--layer-height", type=float, default=DEFAULT_CONFIG.layer_height)
    parser.add_argument("--line-width", type=float, default=DEFAULT_CONFIG.line_width)
    parser.add_argument("--hotend-temp", type=float, default=DEFAULT_CONFIG.hotend_temp)
    parser.add_argument("--bed-temp", type=float, default=DEFAULT_CONFIG.bed_temp)
    parser.add_argument("--decay-shape", type=float, default=DEFAULT_CONFIG.decay_shape)
    parser.add_argument("--closing-angle", type=float, default=DEFAULT_CONFIG.closing_angle,
                        help="Sweep past the spiral/circle handover, in radians")
    parser.add_argument("--lift-retract", type=float, default=DEFAULT_CONFIG.lift_retract)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    start = time.perf_counter()
    try:
        config = replace(
            DEFAULT_CONFIG,
            disc_diameter=args.disc_diameter,
            axle_diameter=args.axle_diameter,
            section_height=args.section_height,
            layer_height=args.layer_height,
            line_width=args.line_width,
            hotend_temp=args.hotend_temp,
            bed_temp=args.bed_temp,
            decay_shape=args.decay_shape,
            closing_angle=args.closing_angle,
            lift_retract=args.lift_retract,
        )
        # validate everything before the output file is truncated
        shapes = spool_shapes(config)
        params = MotionParameters.from_config(config)

        writer = GCodeWriter(args.output)
        state = MotionState(params, sink=writer)
        preamble(state, config)
        purge_line(state, config)
        layers = spool_job(state, shapes, config)
        writer.flush()
    except (InvalidConfiguration, IOFailure) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start

    print(f"Wrote {writer.lines_written} lines ({len(layers)} layers) to {args.output}")
    print(f"Generated in: {elapsed:.2f} s")


if __name__ == "__main__":
    main()
