"""
Decode a DJI SRT telemetry file and print it as JSON, Fusion settings or CSV.

Usage:
    python3 dump_metrology.py -srtfile DJI_0023.srt
    python3 dump_metrology.py -srtfile DJI_0023.srt -format fusion > drone.setting
    python3 dump_metrology.py -srtfile DJI_0023.srt -format csv -strict
"""

import argparse
import logging
import sys
from typing import List, Optional

from dji_metrology import srt_metrology

logger = logging.getLogger("dump_metrology")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Decode DJI SRT drone telemetry"
    )
    parser.add_argument(
        "-srtfile",
        type=str,
        default=srt_metrology.DEFAULT_SRT_FILE,
        help=f"The SRT file containing the metrology (default: {srt_metrology.DEFAULT_SRT_FILE})"
    )
    parser.add_argument(
        "-format",
        type=str,
        default="json",
        choices=srt_metrology.OUTPUT_FORMATS,
        help="Output format (default: json)"
    )
    parser.add_argument(
        "-strict",
        action="store_true",
        help="Fail on malformed numeric fields and time tokens instead of reading them as zero"
    )
    parser.add_argument(
        "-legacy-vertical-speed",
        action="store_true",
        help="Copy horizontal speed into vertical speed, like older exporters"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log parse progress to stderr"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = srt_metrology.ParserConfig(
        strict=args.strict,
        legacy_vertical_speed=args.legacy_vertical_speed,
    )

    try:
        metrology, diagnostics = srt_metrology.load_metrology(args.srtfile, config)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.srtfile, exc)
        return 1
    except srt_metrology.MetrologyError as exc:
        logger.error("Cannot decode %s: %s", args.srtfile, exc)
        return 1

    if diagnostics:
        logger.warning("%d line(s) of %s decoded with errors", len(diagnostics), args.srtfile)

    print(srt_metrology.export_metrology(metrology, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
