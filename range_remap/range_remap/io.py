from __future__ import annotations

import gzip
from enum import Enum
from pathlib import Path

import pandas as pd

from range_remap.mapping import RangeMap
from range_remap.parser import Almanac, parse_almanac
from range_remap.pipeline import PipelineConfig


class FileFormat(str, Enum):
    CSV_GZIP = "csv-gzip"
    PARQUET = "parquet"


TABLE_COLUMNS: tuple[str, ...] = (
    "source_start",
    "source_end",
    "destination_start",
    "destination_end",
    "length",
)


def read_almanac_file(path: Path, config: PipelineConfig | None = None) -> Almanac:
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as handle:
            text = handle.read()
    else:
        text = path.read_text(encoding="utf-8")
    return parse_almanac(text, config)


def table_to_frame(table: RangeMap) -> pd.DataFrame:
    rows = [
        (src.start, src.end, dst.start, dst.end, src.length)
        for src, dst in sorted(table.entries)
    ]
    # Almanac values are unsigned 64-bit and can exceed int64.
    df = pd.DataFrame(rows, columns=list(TABLE_COLUMNS), dtype="uint64")
    df.attrs["source_label"] = table.source_label
    df.attrs["destination_label"] = table.destination_label
    return df


def output_path_for_table(output_root: Path, table: RangeMap, output_format: FileFormat) -> Path:
    base = f"{table.source_label}-to-{table.destination_label}"
    if output_format == FileFormat.CSV_GZIP:
        return output_root / f"{base}.csv.gz"
    return output_root / f"{base}.parquet"


def write_table_file(df: pd.DataFrame, output_file: Path, output_format: FileFormat) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)

    if output_format == FileFormat.CSV_GZIP:
        df.to_csv(output_file, index=False, compression="gzip")
        return

    if output_format == FileFormat.PARQUET:
        df.to_parquet(output_file, index=False)
        return

    raise ValueError(f"Unsupported output format: {output_format}")
