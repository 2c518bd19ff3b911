"""
Agent configuration loading and caching.

The agent reads its settings from the ``[agent]`` table of a TOML file. The
validated AgentConfig is cached so every component of a run sees the same
settings.
"""

import logging
import tomllib
from pathlib import Path
from typing import Optional

from ..models.config import AgentConfig
from ..validation import ErrorSeverity, ValidationError, handle_config_error
from .validators import validate_agent_config

logger = logging.getLogger(__name__)

AGENT_TABLE = "agent"

# Cached AgentConfig, filled by the first get_config() call
_CONFIG: Optional[AgentConfig] = None

# conf/config.toml at the repository root; embedding applications point elsewhere with set_config_path()
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """Use ``config_path`` for the next get_config() call, dropping the cached settings."""
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.info(f"Agent settings will be read from {config_path}")


def clear_config_cache() -> None:
    global _CONFIG
    _CONFIG = None
    logger.debug("Agent settings cache cleared")


def load_agent_config(config_path: Path) -> AgentConfig:
    """
    Read and validate the ``[agent]`` table of a TOML file.

    A file without an ``[agent]`` table yields the default settings. Relative
    ``output_dir`` values are resolved against the directory holding the file.

    Args:
        config_path: Path to the TOML file

    Returns:
        Validated AgentConfig

    Raises:
        FileNotFoundError: If the file is missing
        tomllib.TOMLDecodeError: If the file is not valid TOML
        ValidationError: If a setting has an unusable value
    """
    config_path = Path(config_path)
    logger.info(f"Reading agent settings from {config_path}")

    try:
        with open(config_path, "rb") as f:
            document = tomllib.load(f)
    except FileNotFoundError as e:
        handle_config_error(
            error=e,
            context=f"reading agent settings: {config_path} does not exist",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger,
        )
        raise
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing agent settings in {config_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger,
        )
        raise

    if AGENT_TABLE not in document:
        logger.warning(f"No [{AGENT_TABLE}] table in {config_path}, using default agent settings")

    try:
        agent_config = validate_agent_config(
            document.get(AGENT_TABLE, {}), base_dir=config_path.parent
        )
    except ValidationError as e:
        handle_config_error(
            error=e,
            context=f"validating [{AGENT_TABLE}] in {config_path}",
            severity=ErrorSeverity.ERROR,
            reraise=False,
            logger=logger,
        )
        raise

    logger.info(
        f"Agent settings loaded "
        f"(evolution={agent_config.track_consumption_evolution}, "
        f"call_trees={agent_config.call_trees_consumption}, "
        f"storage={agent_config.storage.format})"
    )
    return agent_config


def get_config() -> AgentConfig:
    """
    Return the agent settings, reading them on first use.

    Raises:
        FileNotFoundError: If the settings file is missing
        tomllib.TOMLDecodeError: If the file is not valid TOML
        ValidationError: If a setting has an unusable value
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_agent_config(_CONFIG_FILE_PATH)
    return _CONFIG
