"""
Agent configuration for the joularpy package.

Settings are read from the ``[agent]`` table of a TOML file, validated into
an AgentConfig and cached.
"""

from .manager import (
    clear_config_cache,
    get_config,
    load_agent_config,
    set_config_path,
)
from .storage_config import StorageConfig
from .validators import validate_agent_config

__all__ = [
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "load_agent_config",
    "validate_agent_config",
    "StorageConfig",
]
