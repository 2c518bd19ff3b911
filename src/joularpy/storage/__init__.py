"""
Result sinks for persisting energy datasets.

Every dataset the agent reports (per-method energy, per-call-tree energy,
per-method evolution) is a list of ``(key, value)`` rows written to one named
target. Two backends are provided, both built on Polars:
- CSV, header-less ``key,value`` lines (default)
- Parquet, with configurable compression
"""

from .base import ResultSink
from .csv_sink import CsvResultSink
from .parquet_sink import ParquetResultSink
from .factory import create_result_sink

__all__ = ["ResultSink", "CsvResultSink", "ParquetResultSink", "create_result_sink"]
