"""
Data models for the energy reporting agent.

Configuration Models:
- Agent-wide reporting settings and storage selection

Measurement Models:
- Read-only snapshot of accumulated energy and memory measurements
- Scope tag separating all methods from filtered methods
"""

from .config import AgentConfig
from .snapshot import MeasurementSnapshot, Scope

__all__ = [
    "AgentConfig",
    "MeasurementSnapshot",
    "Scope",
]
