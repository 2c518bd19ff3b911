"""
Storage configuration model and validation.

This module defines the StorageConfig dataclass which selects the result sink
backend used to persist energy datasets and, for Parquet, its compression.
"""

from typing import Literal, Dict, Any
from dataclasses import dataclass

SUPPORTED_FORMATS = ("csv", "parquet")
SUPPORTED_COMPRESSIONS = ("snappy", "gzip", "brotli", "lz4", "zstd", "uncompressed")


@dataclass
class StorageConfig:
    """
    Configuration model for result storage settings.

    Attributes:
        format: Result sink backend
            - 'csv': one ``key,value`` line per row, readable by the usual
              JoularJX tooling (default)
            - 'parquet': columnar ``key``/``value`` file
        compression: Compression algorithm for Parquet format

    Note:
        Compression setting only applies to Parquet format.
    """

    format: Literal["csv", "parquet"] = "csv"
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd", "uncompressed"] = "snappy"

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "StorageConfig":
        """
        Create a StorageConfig instance from a dictionary.

        Args:
            config_dict: Dictionary containing storage configuration

        Returns:
            StorageConfig instance

        Raises:
            ValueError: If invalid configuration values are provided
        """
        format_type = config_dict.get("format", "csv")
        compression = config_dict.get("compression", "snappy")

        if format_type not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported storage format: {format_type}")

        # Compression is only meaningful for Parquet
        if format_type == "parquet" and compression not in SUPPORTED_COMPRESSIONS:
            raise ValueError(f"Unsupported compression algorithm: {compression}")

        return cls(format=format_type, compression=compression)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the StorageConfig to a dictionary.

        Returns:
            Dictionary representation of the StorageConfig
        """
        return {
            "format": self.format,
            "compression": self.compression,
        }
