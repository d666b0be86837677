"""Command line entry: interpolate an s-rep stored as header + spoke files."""
import argparse
import logging
import sys
from typing import Optional, Sequence

from srepkit import config
from srepkit.io import export_srep, read_srep
from srepkit.logging_config import setup_logging
from srepkit.models.sreps import Interpolater, SRepError

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Interpolate an elliptical s-rep to a denser one and export it."
    )
    parser.add_argument("header", help="Input s-rep header xml file.")
    parser.add_argument("--output-dir", required=True, help="Directory to write the interpolated s-rep to.")
    parser.add_argument("--base-name", default="interpolated", help="Base name of the exported files.")
    parser.add_argument(
        "--level",
        type=int,
        default=config.DEFAULT_INTERPOLATION_LEVEL,
        help="Interpolation level; every level doubles the density (default: %(default)s).",
    )
    parser.add_argument(
        "--skeleton-scheme",
        choices=config.SKELETON_SCHEMES,
        default="linear",
        help="Interpolation of skeletal positions (default: linear).",
    )
    parser.add_argument(
        "--max-points",
        type=int,
        default=config.MAX_INTERPOLATED_POINTS,
        help="Refuse to produce more points than this (default: %(default)s).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output.")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        srep = read_srep(args.header)
        interp = Interpolater(args.level, max_points=args.max_points, skeleton_scheme=args.skeleton_scheme)
        interp_srep = interp.interpolate(srep)
        header = export_srep(interp_srep, args.output_dir, args.base_name)
    except (SRepError, OSError) as e:
        logger.error("Interpolation failed: %s", e)
        return 1
    logger.info("Wrote %r to %s", interp_srep, header)
    return 0


if __name__ == "__main__":
    sys.exit(main())
