"""
Configuration data models.

This module contains the agent configuration read by the shutdown stage,
loaded from the ``[agent]`` table of `config.toml`.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ..config.storage_config import StorageConfig


@dataclass
class AgentConfig:
    """
    Configuration for the agent's reporting behavior, loaded from `config.toml`.
    """

    # Directory where flat datasets are written. Relative evolution paths hang off it too.
    output_dir: Path = Path(".")
    # Export one time series file per method at shutdown.
    track_consumption_evolution: bool = False
    # Root folder of the evolution files; "all" and "filtered" are created below it.
    evolution_data_path: Path = Path("evolution")
    # Export call tree energy datasets at shutdown.
    call_trees_consumption: bool = False
    # Level name applied to the package logger.
    logger_level: str = "INFO"
    # Result sink backend selection.
    storage: StorageConfig = field(default_factory=StorageConfig)

    @property
    def resolved_evolution_path(self) -> Path:
        """Evolution root, resolved against ``output_dir`` when relative."""
        return self.output_dir / self.evolution_data_path
