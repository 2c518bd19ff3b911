"""
Measurement snapshot data models.

This module defines the read-only view of everything the agent measured
during a run, as handed to the shutdown stage, and the scope tag used to
route evolution data into its folder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class Scope(Enum):
    """Which methods a dataset covers. The value doubles as the evolution folder name."""

    ALL = "all"
    FILTERED = "filtered"


@dataclass(frozen=True)
class MeasurementSnapshot:
    """
    Immutable view of accumulated energy and memory measurements.

    Energy values are in joules, timestamps are Unix seconds. Values are
    passed through as measured; a negative entry points at an upstream bug
    and is written out unchanged.
    """

    # Energy consumed by the whole program.
    total_consumed_energy: float = 0.0
    # Method name -> energy, for every observed method and for filtered methods only.
    methods_energy: Mapping[str, float] = field(default_factory=dict)
    filtered_methods_energy: Mapping[str, float] = field(default_factory=dict)
    # Call tree identifier -> energy.
    call_trees_energy: Mapping[str, float] = field(default_factory=dict)
    filtered_call_trees_energy: Mapping[str, float] = field(default_factory=dict)
    # Method name -> (timestamp -> energy).
    methods_evolution: Mapping[str, Mapping[int, float]] = field(default_factory=dict)
    filtered_methods_evolution: Mapping[str, Mapping[int, float]] = field(default_factory=dict)
    # Highest resident memory seen during the run.
    peak_memory_bytes: int = 0

    def snapshot(self) -> "MeasurementSnapshot":
        """Return self, so a snapshot can stand wherever a status object is expected."""
        return self
