"""
Orchestration of the agent's shutdown-time reporting.

This package contains:
- ShutdownHandler: runs the ordered shutdown sequence
- EvolutionExporter: writes per-method consumption evolution files
- ShutdownReport / StepResult: explicit outcome of every shutdown step
- ShutdownHooks: runs handlers at interpreter exit and on SIGINT/SIGTERM
"""

from .evolution import EvolutionExporter, sanitize_method_name
from .results import ShutdownReport, StepResult, StepStatus
from .shutdown_handler import ShutdownHandler
from .signal_handler import ShutdownHooks, run_registered_handlers

__all__ = [
    "EvolutionExporter",
    "sanitize_method_name",
    "ShutdownReport",
    "StepResult",
    "StepStatus",
    "ShutdownHandler",
    "ShutdownHooks",
    "run_registered_handlers",
]
