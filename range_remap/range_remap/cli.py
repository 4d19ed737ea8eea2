from __future__ import annotations

import argparse
import gzip
import logging
from pathlib import Path

from range_remap.errors import AlmanacFormatError, ChainBroken, MalformedEntry
from range_remap.io import (
    FileFormat,
    output_path_for_table,
    read_almanac_file,
    table_to_frame,
    write_table_file,
)
from range_remap.pipeline import PipelineConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="range-remap",
        description="Map almanac seeds through their table chain and report the lowest result.",
    )
    parser.add_argument(
        "almanac_path",
        type=Path,
        help="Path to an almanac text file (optionally gzip-compressed, .gz).",
    )
    parser.add_argument(
        "--origin",
        default=PipelineConfig.origin_label,
        help="Label the chain starts from (default: seed).",
    )
    parser.add_argument(
        "--terminal",
        default=PipelineConfig.terminal_label,
        help="Label the chain ends at (default: location).",
    )
    parser.add_argument(
        "--brute-force",
        action="store_true",
        help="Evaluate seed ranges value by value instead of through the collapsed table.",
    )
    parser.add_argument(
        "--trace",
        type=int,
        nargs="+",
        default=None,
        metavar="SEED",
        help="Print every hop of the lookup for the given seed values.",
    )
    parser.add_argument(
        "--export-table",
        type=Path,
        default=None,
        metavar="DIR",
        help="Optional folder to write the collapsed origin-to-terminal table into.",
    )
    parser.add_argument(
        "--output-format",
        type=FileFormat,
        choices=list(FileFormat),
        default=FileFormat.PARQUET,
        help="Format of the exported table (default: parquet).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)-5.5s [%(name)s] %(message)s",
    )

    almanac_path: Path = args.almanac_path
    config = PipelineConfig(origin_label=args.origin, terminal_label=args.terminal)
    export_table: Path | None = args.export_table
    output_format: FileFormat = args.output_format

    if not almanac_path.is_file():
        parser.error(f"Almanac file not found: {almanac_path}")

    try:
        almanac = read_almanac_file(almanac_path, config)
        seed_ranges = almanac.seed_ranges if len(almanac.seeds) % 2 == 0 else None
    except (AlmanacFormatError, MalformedEntry) as exc:
        parser.error(str(exc))
    except (UnicodeDecodeError, gzip.BadGzipFile, EOFError) as exc:
        parser.error(f"Could not read almanac {almanac_path}: {exc}")

    pipeline = almanac.pipeline

    try:
        for seed in args.trace or []:
            hops = " -> ".join(f"{label} {value}" for label, value in pipeline.trace(seed))
            print(f"Trace: {hops}")

        closest = pipeline.lookup_min(almanac.seeds)
        print(f"Lowest {config.terminal_label} for individual seeds: {closest}")

        if seed_ranges is None:
            logger.warning(
                "Odd number of seed values (%d), skipping seed ranges", len(almanac.seeds)
            )
        else:
            if args.brute_force:
                closest = pipeline.lookup_min_over_ranges_brute_force(seed_ranges)
            else:
                closest = pipeline.lookup_min_over_ranges(seed_ranges)
            print(f"Lowest {config.terminal_label} for seed ranges: {closest}")

        if export_table is not None:
            table = pipeline.compose_chain()
            destination = output_path_for_table(export_table, table, output_format)
            write_table_file(table_to_frame(table), destination, output_format)
            print(f"Collapsed table written to: {destination}")
    except ChainBroken as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
