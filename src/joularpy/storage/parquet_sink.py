"""
Parquet result sink using Polars for columnar output.
"""

import logging
from pathlib import Path
from typing import List, Literal

import polars as pl

from .base import ResultSink, Row
from .csv_sink import frame_to_rows, rows_to_frame

logger = logging.getLogger(__name__)


class ParquetResultSink(ResultSink):
    """
    Result sink storing each target as a ``key``/``value`` Parquet file.

    Useful when the evolution datasets get large: one compressed columnar
    file per method instead of a text file.
    """

    extension = ".parquet"

    def __init__(
        self,
        output_dir=".",
        compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd", "uncompressed"] = "snappy",
    ):
        """
        Args:
            output_dir: Directory against which relative target names are resolved
            compression: Compression algorithm to use
        """
        super().__init__(output_dir)
        self.compression = compression
        logger.debug(f"Initialized ParquetResultSink with compression: {compression}")

    def _write_rows(self, path: Path, rows: List[Row]) -> None:
        rows_to_frame(rows).write_parquet(path, compression=self.compression)

    def _read_rows(self, path: Path) -> List[Row]:
        return frame_to_rows(pl.read_parquet(path))
