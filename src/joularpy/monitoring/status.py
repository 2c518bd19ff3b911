"""
Runtime accumulator for energy and memory measurements.

Measurement threads push values into a MonitoringStatus while the monitored
program runs. At shutdown the orchestrator takes a MeasurementSnapshot from it
and never touches the live maps again.
"""

import logging
import threading
from typing import Dict, Optional

import psutil

from ..models.snapshot import MeasurementSnapshot

logger = logging.getLogger(__name__)


class MonitoringStatus:
    """
    Thread-safe store for the values gathered during a monitoring run.

    Every mutator and snapshot() take the same lock, so a snapshot never
    observes a half-applied update.
    """

    def __init__(self, pid: Optional[int] = None):
        """
        Args:
            pid: Process whose resident memory is sampled by update_used_memory().
                Defaults to the current process.
        """
        self._lock = threading.Lock()
        self._process = psutil.Process(pid)
        self._total_consumed_energy = 0.0
        self._methods_energy: Dict[str, float] = {}
        self._filtered_methods_energy: Dict[str, float] = {}
        self._call_trees_energy: Dict[str, float] = {}
        self._filtered_call_trees_energy: Dict[str, float] = {}
        self._methods_evolution: Dict[str, Dict[int, float]] = {}
        self._filtered_methods_evolution: Dict[str, Dict[int, float]] = {}
        self._peak_memory_bytes = 0

    def add_total_energy(self, energy: float) -> None:
        with self._lock:
            self._total_consumed_energy += energy

    def add_method_energy(self, method: str, energy: float) -> None:
        with self._lock:
            self._methods_energy[method] = self._methods_energy.get(method, 0.0) + energy

    def add_filtered_method_energy(self, method: str, energy: float) -> None:
        with self._lock:
            self._filtered_methods_energy[method] = (
                self._filtered_methods_energy.get(method, 0.0) + energy
            )

    def add_call_tree_energy(self, call_tree: str, energy: float) -> None:
        with self._lock:
            self._call_trees_energy[call_tree] = self._call_trees_energy.get(call_tree, 0.0) + energy

    def add_filtered_call_tree_energy(self, call_tree: str, energy: float) -> None:
        with self._lock:
            self._filtered_call_trees_energy[call_tree] = (
                self._filtered_call_trees_energy.get(call_tree, 0.0) + energy
            )

    def add_method_evolution(self, method: str, timestamp: int, energy: float) -> None:
        """Record the energy of ``method`` for one sampling cycle ending at ``timestamp``."""
        with self._lock:
            self._methods_evolution.setdefault(method, {})[timestamp] = energy

    def add_filtered_method_evolution(self, method: str, timestamp: int, energy: float) -> None:
        with self._lock:
            self._filtered_methods_evolution.setdefault(method, {})[timestamp] = energy

    def update_used_memory(self, used_bytes: Optional[int] = None) -> int:
        """
        Fold a memory reading into the peak value.

        Args:
            used_bytes: Reading to record. When omitted, the resident set
                size of the watched process is sampled with psutil.

        Returns:
            The peak memory usage in bytes after the update
        """
        if used_bytes is None:
            try:
                used_bytes = self._process.memory_info().rss
            except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
                logger.debug(f"Cannot sample memory of pid {self._process.pid}: {e}")
                used_bytes = 0

        with self._lock:
            if used_bytes > self._peak_memory_bytes:
                self._peak_memory_bytes = used_bytes
            return self._peak_memory_bytes

    def snapshot(self) -> MeasurementSnapshot:
        """
        Copy the current measurements into an immutable snapshot.

        Later updates to this status do not show through the returned object.
        """
        with self._lock:
            return MeasurementSnapshot(
                total_consumed_energy=self._total_consumed_energy,
                methods_energy=dict(self._methods_energy),
                filtered_methods_energy=dict(self._filtered_methods_energy),
                call_trees_energy=dict(self._call_trees_energy),
                filtered_call_trees_energy=dict(self._filtered_call_trees_energy),
                methods_evolution={k: dict(v) for k, v in self._methods_evolution.items()},
                filtered_methods_evolution={
                    k: dict(v) for k, v in self._filtered_methods_evolution.items()
                },
                peak_memory_bytes=self._peak_memory_bytes,
            )
