"""
Configuration validation utilities.

This module turns the raw ``[agent]`` table into a validated AgentConfig.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..models.config import AgentConfig
from ..validation import (
    ValidationError,
    validate_boolean,
    validate_enum_choice,
    validate_non_empty_string,
)
from .storage_config import StorageConfig

logger = logging.getLogger(__name__)

LOGGER_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_agent_config(agent_data: Dict[str, Any], base_dir: Path = Path(".")) -> AgentConfig:
    """
    Validate and create an AgentConfig from raw configuration data.

    Args:
        agent_data: Raw ``[agent]`` table from TOML
        base_dir: Directory used to resolve a relative ``output_dir``

    Returns:
        Validated AgentConfig instance

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(agent_data, dict):
        raise ValidationError("agent section must be a table", field_name="agent", value=agent_data)

    output_dir = Path(
        validate_non_empty_string(agent_data.get("output_dir", "."), field_name="agent.output_dir")
    )
    if not output_dir.is_absolute():
        output_dir = base_dir / output_dir

    track_consumption_evolution = validate_boolean(
        agent_data.get("track_consumption_evolution", False),
        field_name="agent.track_consumption_evolution",
    )

    evolution_data_path = Path(
        validate_non_empty_string(
            agent_data.get("evolution_data_path", "evolution"),
            field_name="agent.evolution_data_path",
        )
    )

    call_trees_consumption = validate_boolean(
        agent_data.get("call_trees_consumption", False),
        field_name="agent.call_trees_consumption",
    )

    logger_level = validate_enum_choice(
        agent_data.get("logger_level", "INFO"),
        choices=LOGGER_LEVELS,
        field_name="agent.logger_level",
        case_sensitive=False,
    )

    try:
        storage = StorageConfig.from_dict(agent_data.get("storage", {}))
    except ValueError as e:
        raise ValidationError(str(e), field_name="agent.storage") from e

    config = AgentConfig(
        output_dir=output_dir,
        track_consumption_evolution=track_consumption_evolution,
        evolution_data_path=evolution_data_path,
        call_trees_consumption=call_trees_consumption,
        logger_level=logger_level,
        storage=storage,
    )
    logger.debug(f"Validated agent configuration: {config}")
    return config
