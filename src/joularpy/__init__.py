"""
joularpy: shutdown-time reporting for a runtime energy monitoring agent.

When the monitored program ends, the agent releases its power-sampling
resource, prints a summary and writes every energy dataset it gathered to
disk, one file per dataset.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Measurement snapshot and configuration data structures
- validation: Error types and value validation
- monitoring: Runtime accumulator and monitoring resource interface
- storage: Result sinks (CSV, Parquet)
- orchestration: Shutdown sequence, evolution export and exit hooks
- utils: Log formatting and logging setup

Usage:
    from joularpy import MonitoringStatus, ShutdownHandler, ShutdownHooks, get_config

    config = get_config()
    handler = ShutdownHandler.from_config(os.getpid(), cpu, status, config)
    ShutdownHooks().install(handler)
"""

# Configuration comes first: models.config depends on config.storage_config
from .config import get_config, clear_config_cache, set_config_path, load_agent_config

from .models import AgentConfig, MeasurementSnapshot, Scope
from .monitoring import Cpu, MonitoringStatus
from .orchestration import (
    EvolutionExporter,
    ShutdownHandler,
    ShutdownHooks,
    ShutdownReport,
    StepResult,
    StepStatus,
    sanitize_method_name,
)
from .storage import CsvResultSink, ParquetResultSink, ResultSink, create_result_sink
from .utils import JoularFormatter, setup_logging
from .validation import ResultSinkError, ValidationError

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "load_agent_config",
    # Models
    "AgentConfig",
    "MeasurementSnapshot",
    "Scope",
    # Monitoring
    "Cpu",
    "MonitoringStatus",
    # Orchestration
    "EvolutionExporter",
    "ShutdownHandler",
    "ShutdownHooks",
    "ShutdownReport",
    "StepResult",
    "StepStatus",
    "sanitize_method_name",
    # Storage
    "CsvResultSink",
    "ParquetResultSink",
    "ResultSink",
    "create_result_sink",
    # Logging
    "JoularFormatter",
    "setup_logging",
    # Errors
    "ResultSinkError",
    "ValidationError",
]
