"""
CSV result sink using Polars.

Targets are written as header-less ``key,value`` lines, the layout expected
by the JoularJX reporting tools.
"""

import logging
from pathlib import Path
from typing import List

import polars as pl

from .base import ResultSink, Row

logger = logging.getLogger(__name__)

ROW_SCHEMA = {"key": pl.Utf8, "value": pl.Float64}


def rows_to_frame(rows: List[Row]) -> pl.DataFrame:
    """Build the two-column frame shared by the Polars-backed sinks."""
    return pl.DataFrame(
        {
            "key": [key for key, _ in rows],
            "value": [value for _, value in rows],
        },
        schema=ROW_SCHEMA,
    )


def frame_to_rows(df: pl.DataFrame) -> List[Row]:
    return list(zip(df["key"].to_list(), df["value"].to_list()))


class CsvResultSink(ResultSink):
    """Result sink writing one ``key,value`` line per row."""

    extension = ".csv"

    def _write_rows(self, path: Path, rows: List[Row]) -> None:
        rows_to_frame(rows).write_csv(path, include_header=False)

    def _read_rows(self, path: Path) -> List[Row]:
        # Polars refuses to infer anything from an empty file
        if not path.read_bytes().strip():
            return []
        df = pl.read_csv(path, has_header=False, schema=ROW_SCHEMA)
        return frame_to_rows(df)
