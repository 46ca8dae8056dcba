#!/usr/bin/env python3
"""
Animated cellular-noise "bubbles" generator.

Renders a looping field of pink/red cells. Each frame is the distance from
every pixel to the nearest of N moving feature points, normalized by the
frame maximum and pushed through a two-segment flesh ramp.

Cells
- --cells orbit (default): each cell travels around its own random ellipse,
  one full lap per animation, so the output loops seamlessly.
- --cells static: fixed random points; every frame is identical.

Output formats
- gif:   infinitely looping GIF (Pillow), --delay ms per frame
- rgb24: raw frames, play with ffplay -f rawvideo

Determinism
- --seed fixes every random draw. Without it a fresh seed is drawn and
  printed, so any run can be repeated.
"""

import argparse
import sys

from .cells import CELL_KINDS, CellField
from .encode import OUTPUT_FORMATS, infer_format, open_sink
from .field import Canvas
from .progress import ProgressBar
from .render import generate
from .rng import make_rng, resolve_seed

# -----------------------------
# CLI
# -----------------------------

def build_parser():
    ap = argparse.ArgumentParser(description="Animated cellular noise (moving bubbles) generator.")

    # Canvas
    ap.add_argument("-W", "--width", type=int, required=True, help="width of the image")
    ap.add_argument("-H", "--height", type=int, required=True, help="height of the image")
    ap.add_argument("-f", "--frames", type=int, required=True, help="number of animation frames")
    ap.add_argument("-n", "--num-cells", type=int, required=True, help="number of cells to generate")

    # Output
    ap.add_argument("-o", "--out", type=str, required=True, help="output file")
    ap.add_argument("--output-format", type=str, default=None, choices=list(OUTPUT_FORMATS),
                    help="Default: gif for a .gif path, rgb24 otherwise.")
    ap.add_argument("--delay", type=int, default=40, help="GIF frame duration in ms.")

    # Cells / randomness
    ap.add_argument("--cells", type=str, default="orbit", choices=list(CELL_KINDS))
    ap.add_argument("--seed", type=int, default=None)

    ap.add_argument("--no-progress", action="store_true", help="Do not draw the progress bar.")
    return ap

def parse_args(argv=None):
    return build_parser().parse_args(argv)

# -----------------------------
# Main
# -----------------------------

def main(argv=None):
    args = parse_args(argv)

    try:
        canvas = Canvas(args.width, args.height, args.frames, args.num_cells)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if args.delay < 0:
        print("Error: --delay must be >= 0", file=sys.stderr)
        sys.exit(1)

    fmt = args.output_format or infer_format(args.out)
    seed = resolve_seed(args.seed)
    field = CellField.random(canvas, make_rng(seed, f"cells_{args.cells}"), kind=args.cells)

    progress = None if args.no_progress else ProgressBar(canvas.frames).start()
    try:
        with open_sink(args.out, canvas.width, canvas.height, fmt=fmt, delay=args.delay) as sink:
            written = generate(canvas, field, sink, progress=progress)
    except OSError as e:
        print(f"Error: could not write {args.out}: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if progress is not None:
            progress.close()

    print(f"Done. Wrote {written} frames to {args.out}")
    print(f"Seed: {seed}")
    if fmt == "rgb24":
        print(f"Play: ffplay -f rawvideo -pixel_format rgb24 -video_size {canvas.width}x{canvas.height} "
              f"{args.out}")
    return 0

if __name__ == "__main__":
    main()
