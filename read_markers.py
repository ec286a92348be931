from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from marker_reader.config import (
    DEFAULT_LUMINANCE_CUTOFF,
    DEFAULT_PEAK_RATIO,
    DEFAULT_RADIUS,
    DetectionParameters,
    PlotBounds,
)
from marker_reader.exceptions import InvalidArgumentError, MalformedInputError
from marker_reader.image_io import load_image, save_annotated
from marker_reader.logging_utils import setup_logger
from marker_reader.peaks import render_peak_mask
from marker_reader.pipeline import find_markers
from marker_reader.plot_space import write_points_csv
from marker_reader.ppm_codec import decode_image, encode_image, write_ppm
from marker_reader.raster import RasterImage
from marker_reader.verification import verify_points_vs_gt


EXIT_OK = 0
EXIT_INVALID_ARGUMENT = 1
EXIT_USAGE = 2
EXIT_MALFORMED_INPUT = 3

DESCRIPTION = (
    "Extracts the data points from a scanned data plot. Reads an uncompressed "
    "PPM (P3) image, from a file or stdin, and prints one 'x<TAB>y' line per "
    "detected marker to stderr."
)


class MarkerArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise InvalidArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = MarkerArgumentParser(
        prog="read_markers",
        description=DESCRIPTION,
        add_help=False,
    )
    parser.add_argument(
        "image",
        nargs="?",
        type=Path,
        default=None,
        help="Scanned plot to extract from (PPM, or any format OpenCV reads). Defaults to stdin.",
    )
    parser.add_argument("-h", "--help", action="store_true", help="Print this help and exit.")
    parser.add_argument(
        "-r",
        dest="radius",
        type=float,
        default=DEFAULT_RADIUS,
        metavar="R",
        help="Radius of each data point in pixels [default: 8].",
    )
    parser.add_argument("-x", dest="x_low", type=float, default=0.0, metavar="x",
                        help="Lower bound of the x scale [default: 0].")
    parser.add_argument("-X", dest="x_high", type=float, default=1.0, metavar="X",
                        help="Upper bound of the x scale [default: 1].")
    parser.add_argument("-y", dest="y_low", type=float, default=0.0, metavar="y",
                        help="Lower bound of the y scale [default: 0].")
    parser.add_argument("-Y", dest="y_high", type=float, default=1.0, metavar="Y",
                        help="Upper bound of the y scale [default: 1].")
    parser.add_argument(
        "-o",
        dest="output",
        action="store_true",
        help="Write the post-processed vote image to stdout as PPM (> imageOUT.ppm).",
    )
    parser.add_argument(
        "--cutoff",
        type=int,
        default=DEFAULT_LUMINANCE_CUTOFF,
        help="Luminance above which a pixel counts as background [default: 150].",
    )
    parser.add_argument(
        "--peak-ratio",
        type=float,
        default=DEFAULT_PEAK_RATIO,
        help="Fraction of the strongest vote a marker center must exceed [default: 0.8].",
    )
    parser.add_argument("--csv", type=Path, default=None,
                        help="Also save the detected points as CSV.")
    parser.add_argument("--annotate", type=Path, default=None,
                        help="Save a copy of the input with detected markers outlined.")
    parser.add_argument("--peaks-out", type=Path, default=None,
                        help="Save the marker-center mask as a PPM image.")
    parser.add_argument("--gt-file", type=Path, default=None,
                        help="Ground-truth point file to verify the detections against.")
    parser.add_argument(
        "--verify-output-dir",
        type=Path,
        default=Path("Verification"),
        help="Directory where verification overlays are saved.",
    )
    parser.add_argument(
        "--verify-tolerance",
        type=float,
        default=0.02,
        help="Max plot-space distance for a detection to match a GT point.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Diagnostics verbosity on stderr.",
    )
    return parser


def read_input(image_path: Optional[Path]) -> RasterImage:
    if image_path is None:
        return decode_image(sys.stdin.buffer.read())
    return load_image(image_path)


def write_stdout_image(img: RasterImage) -> None:
    data = encode_image(img)
    stream = getattr(sys.stdout, "buffer", None)
    if stream is None:
        sys.stdout.write(data.decode("ascii"))
    else:
        stream.write(data)
    sys.stdout.flush()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except InvalidArgumentError as exc:
        print(f"Unknown command line arg. -h for help. ({exc})", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_INVALID_ARGUMENT

    if args.help:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    logger = setup_logger("marker_reader", args.log_level)
    logger.info("Expected radius: %f", args.radius)
    logger.info("Lowerbound x: %f", args.x_low)
    logger.info("Upperbound x: %f", args.x_high)
    logger.info("Lowerbound y: %f", args.y_low)
    logger.info("Upperbound y: %f", args.y_high)

    try:
        params = DetectionParameters(
            radius=args.radius,
            luminance_cutoff=args.cutoff,
            peak_ratio=args.peak_ratio,
        )
    except InvalidArgumentError as exc:
        print(f"Invalid argument: {exc}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_INVALID_ARGUMENT
    bounds = PlotBounds(args.x_low, args.x_high, args.y_low, args.y_high)

    try:
        image = read_input(args.image)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INVALID_ARGUMENT
    except MalformedInputError as exc:
        print(f"\nProblem reading in image: {exc}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return EXIT_MALFORMED_INPUT

    result = find_markers(image, params)
    points = result.to_plot_space(bounds)
    for x, y in points:
        print(f"{x:f}\t{y:f}", file=sys.stderr)

    if args.output:
        write_stdout_image(result.votes)
    if args.csv is not None:
        write_points_csv(points, args.csv)
    if args.annotate is not None:
        save_annotated(image, result.centers, params.radius, args.annotate)
    if args.peaks_out is not None:
        write_ppm(render_peak_mask(result.votes, params.peak_ratio), args.peaks_out)

    if args.gt_file is not None:
        if not args.gt_file.exists():
            print(f"GT file not found: {args.gt_file}", file=sys.stderr)
            return EXIT_INVALID_ARGUMENT
        stem = args.image.stem if args.image is not None else "stdin"
        report = verify_points_vs_gt(
            points=points,
            gt_txt_path=args.gt_file,
            out_dir=args.verify_output_dir,
            image_stem=stem,
            tolerance=args.verify_tolerance,
        )
        print("[verify] overlay:", report["overlay_path"], file=sys.stderr)
        print("[verify] RMSE:", report["rmse"], file=sys.stderr)
        print("[verify] MAE: ", report["mae"], file=sys.stderr)
        print("[verify] matched/missed/extra:",
              report["matched"], report["missed"], report["extra"], file=sys.stderr)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
