"""
Shutdown-time reporting for the energy monitoring agent.

The ShutdownHandler is meant to be called once, at the end of the agent. It
releases the monitoring resource, prints the run summary and writes every
consumption dataset to its own file. Each step records a StepResult so a
failing step is visible without aborting the shutdown.
"""

import logging
import threading
from typing import Callable, List, Mapping, Optional, Union

from ..models.config import AgentConfig
from ..models.snapshot import MeasurementSnapshot, Scope
from ..monitoring.cpu import Cpu
from ..monitoring.status import MonitoringStatus
from ..storage.base import ResultSink
from ..storage.factory import create_result_sink
from ..validation import ErrorSeverity, log_with_severity
from .evolution import EvolutionExporter
from .results import ShutdownReport, StepResult, StepStatus

logger = logging.getLogger(__name__)

# Decimal megabytes, kept for compatibility with existing JoularJX reports
BYTES_PER_MEGABYTE = 1000000


class ShutdownHandler:
    """
    Runs the shutdown sequence and reports the outcome of every step.

    Steps, in order:
    1. Release the monitoring resource (failure is logged and ignored)
    2. Log and print the energy summary
    3. Write all-methods and filtered-methods energy
    4. Write methods consumption evolution, if enabled
    5. Write call tree energy, if enabled
    6. Log completion and print the peak memory usage

    Steps 3 to 5 share one persistence block: the first I/O failure in it
    skips the steps that follow.
    """

    def __init__(
        self,
        app_pid: int,
        result_sink: ResultSink,
        cpu: Cpu,
        status: Union[MonitoringStatus, MeasurementSnapshot],
        config: AgentConfig,
        console: Callable[[str], None] = print,
    ):
        """
        Args:
            app_pid: PID of the monitored application
            result_sink: Sink used to save the data in files
            cpu: Monitoring resource to release
            status: Live status or ready-made snapshot holding the runtime data
            config: Agent configuration
            console: Receives the lines printed to standard output
        """
        self.app_pid = app_pid
        self.result_sink = result_sink
        self.cpu = cpu
        self.status = status
        self.config = config
        self.console = console
        self.evolution_exporter = EvolutionExporter(
            app_pid, result_sink, config.resolved_evolution_path.absolute()
        )
        self._run_lock = threading.Lock()
        self._running = False
        self._report: Optional[ShutdownReport] = None
        self._finish_callbacks: List[Callable[[], None]] = []

    @classmethod
    def from_config(
        cls,
        app_pid: int,
        cpu: Cpu,
        status: Union[MonitoringStatus, MeasurementSnapshot],
        config: AgentConfig,
    ) -> "ShutdownHandler":
        """Build a handler whose result sink follows ``config.storage``."""
        result_sink = create_result_sink(
            config.storage.format,
            config.storage.compression,
            output_dir=config.output_dir,
        )
        return cls(app_pid, result_sink, cpu, status, config)

    @property
    def has_run(self) -> bool:
        """True once the sequence has started."""
        return self._report is not None

    @property
    def running(self) -> bool:
        return self._running

    def add_finish_callback(self, callback: Callable[[], None]) -> None:
        """
        Register a callable invoked once the sequence has finished.

        Callbacks run on the thread that ran the sequence, after the lock is
        released, even when the sequence raised. Exceptions they raise
        propagate out of run().
        """
        if callback not in self._finish_callbacks:
            self._finish_callbacks.append(callback)

    def __call__(self) -> ShutdownReport:
        return self.run()

    def run(self) -> ShutdownReport:
        """
        Run the shutdown sequence.

        Only the first call does any work. A call made while the sequence is
        running, from another thread or from a signal handler interrupting
        it, returns the report in progress without waiting. Later calls
        return the finished report.

        Returns:
            The ShutdownReport of the run
        """
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Shutdown reporting already in progress, ignoring concurrent request")
            return self._report if self._report is not None else ShutdownReport()

        if self._report is not None:
            self._run_lock.release()
            logger.warning("Shutdown reporting already ran, ignoring repeated request")
            return self._report

        report = self._report = ShutdownReport()
        self._running = True
        try:
            self._run_steps(report)
        finally:
            self._running = False
            self._run_lock.release()
            for callback in self._finish_callbacks:
                callback()
        return report

    def _run_steps(self, report: ShutdownReport) -> None:
        report.add(self._release_resource())

        snapshot = self.status.snapshot()
        self._log_summary(snapshot)

        self._persist(snapshot, report)

        logger.info("Energy consumption of methods and filtered methods written to files")
        self._print(f"Max memory usage : {snapshot.peak_memory_bytes // BYTES_PER_MEGABYTE} MB")

    def _print(self, line: str) -> None:
        try:
            self.console(line)
        except (OSError, ValueError) as e:
            # Closed or broken stdout at exit must not stop the files from being written
            logger.warning(f"Cannot write to console: {e}")

    def _release_resource(self) -> StepResult:
        try:
            self.cpu.close()
        except Exception as e:
            # A stuck sensor must not prevent already collected data from being reported
            logger.warning(f"Failed to release monitoring resource: {e}")
            return StepResult(
                "release-monitoring-resource",
                status=StepStatus.FAILED,
                error=e,
                severity=ErrorSeverity.WARNING,
            )
        return StepResult("release-monitoring-resource")

    def _log_summary(self, snapshot: MeasurementSnapshot) -> None:
        total = snapshot.total_consumed_energy
        logger.info(f"JoularJX finished monitoring application with ID {self.app_pid}")
        logger.info(f"Program consumed {total:.2f} joules")
        self._print(f"Program consummed {total:.2f} joules")

    def _persist(self, snapshot: MeasurementSnapshot, report: ShutdownReport) -> None:
        steps = [
            ("save-all-methods", lambda: self.save_results(
                snapshot.methods_energy, "all-methods", "energy")),
            ("save-filtered-methods", lambda: self.save_results(
                snapshot.filtered_methods_energy, "filtered-methods", "energy")),
        ]

        # Writing consumption evolution files only if the option is enabled
        if self.config.track_consumption_evolution:
            steps += [
                ("evolution-all", lambda: self.write_consumption_evolution(
                    snapshot.methods_evolution, Scope.ALL)),
                ("evolution-filtered", lambda: self.write_consumption_evolution(
                    snapshot.filtered_methods_evolution, Scope.FILTERED)),
            ]

        # Writing call trees consumption files only if the option is enabled
        if self.config.call_trees_consumption:
            steps += [
                ("save-all-call-trees", lambda: self.save_results(
                    snapshot.call_trees_energy, "all-call-trees", "energy")),
                ("save-filtered-call-trees", lambda: self.save_results(
                    snapshot.filtered_call_trees_energy, "filtered-call-trees", "energy")),
            ]

        failure: Optional[StepResult] = None
        for name, step in steps:
            if failure is not None:
                report.add(StepResult(name, status=StepStatus.SKIPPED, severity=ErrorSeverity.WARNING))
                continue

            try:
                written = step()
            except OSError as e:
                failure = report.add(
                    StepResult(name, status=StepStatus.FAILED, error=e, severity=ErrorSeverity.ERROR)
                )
                log_with_severity(
                    f"Writing results failed at step {name}, remaining outputs are skipped: {e}",
                    severity=ErrorSeverity.ERROR,
                    logger=logger,
                )
                continue

            if written is False:
                # Evolution folders could not be created; already logged by the exporter
                report.add(StepResult(name, status=StepStatus.FAILED, severity=ErrorSeverity.ERROR))
            else:
                report.add(StepResult(name))

    def save_results(self, consumed_energy_map: Mapping[object, float], node_type: str, data_type: str) -> None:
        """
        Write a flat dataset to its own file.

        The file is named ``joularJX-<pid>-<nodeType>-<dataType>`` and holds
        one row per entry, keys rendered with ``str()``. An existing file of
        the same name is overwritten.

        Args:
            consumed_energy_map: The data to be written
            node_type: Distinguishes methods, call trees, ... in the file name
            data_type: Distinguishes the kind of value (energy, power, ...) in the file name

        Raises:
            OSError: If an I/O error occurs while writing the data
        """
        file_name = f"joularJX-{self.app_pid}-{node_type}-{data_type}"

        with self.result_sink.target(file_name) as out:
            for key, value in consumed_energy_map.items():
                out.write(str(key), value)

    def write_consumption_evolution(
        self, consumption_evolution: Mapping[str, Mapping[int, float]], scope: Scope
    ) -> bool:
        """
        Write each method's consumption evolution into a separate file.

        Returns:
            False if the evolution folders could not be created

        Raises:
            OSError: If writing a method file fails
        """
        return self.evolution_exporter.write(consumption_evolution, scope)
