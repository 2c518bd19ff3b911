"""
Factory for creating result sink instances.
"""

import logging
from pathlib import Path
from typing import Literal, Union

from .base import ResultSink
from .csv_sink import CsvResultSink
from .parquet_sink import ParquetResultSink

logger = logging.getLogger(__name__)


def create_result_sink(
    format_type: Literal["csv", "parquet"] = "csv",
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd", "uncompressed"] = "snappy",
    output_dir: Union[str, Path] = ".",
) -> ResultSink:
    """
    Create a result sink based on the specified format type.

    Args:
        format_type: Storage format type ('csv' or 'parquet')
        compression: Compression algorithm (for Parquet only)
        output_dir: Directory for relative target names

    Returns:
        ResultSink instance

    Raises:
        ValueError: If an unsupported format type is specified
    """
    if format_type == "csv":
        logger.debug(f"Creating CsvResultSink in {output_dir}")
        return CsvResultSink(output_dir)
    elif format_type == "parquet":
        logger.debug(f"Creating ParquetResultSink with compression: {compression}")
        return ParquetResultSink(output_dir, compression=compression)
    else:
        raise ValueError(f"Unsupported storage format: {format_type}")
