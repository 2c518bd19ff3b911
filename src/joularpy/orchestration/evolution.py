"""
Export of per-method consumption evolution.

Each tracked method gets its own file holding one ``timestamp,energy`` row
per sampling cycle. Files are split into an ``all`` and a ``filtered``
folder under the evolution root.
"""

import logging
from pathlib import Path
from typing import Mapping, Union

from ..models.snapshot import Scope
from ..storage.base import ResultSink

logger = logging.getLogger(__name__)


def sanitize_method_name(method_name: str) -> str:
    """
    Make a method name usable as part of a file name.

    ``<`` and ``>`` (found in names such as ``<init>`` and lambdas) become
    ``_``. Every other character is kept.
    """
    return method_name.replace("<", "_").replace(">", "_")


class EvolutionExporter:
    """Writes one evolution file per method into the folder of its scope."""

    def __init__(self, app_pid: int, result_sink: ResultSink, evolution_data_path: Union[str, Path]):
        """
        Args:
            app_pid: PID of the monitored application, used in file names
            result_sink: Sink used to write every method file
            evolution_data_path: Root folder of the evolution files
        """
        self.app_pid = app_pid
        self.result_sink = result_sink
        self.evolution_data_path = Path(evolution_data_path)

    def folder_for(self, scope: Scope) -> Path:
        return self.evolution_data_path / scope.value

    def file_name(self, scope: Scope, method_name: str) -> Path:
        """Target name of the evolution file for ``method_name``."""
        return self.folder_for(scope) / (
            f"joularJX-{self.app_pid}-{sanitize_method_name(method_name)}-evolution"
        )

    def ensure_folders(self) -> bool:
        """
        Create the folders of both scopes if they do not exist yet.

        Returns:
            False, after logging an error, when a folder cannot be created
        """
        for scope in Scope:
            dir_name = self.folder_for(scope)
            try:
                dir_name.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.debug(f"mkdir {dir_name} failed: {e}")
                logger.error(
                    f"Cannot create {dir_name} folder. "
                    f"Methods consumption evolution cannot be reported."
                )
                return False
        return True

    def write(self, consumption_evolution: Mapping[str, Mapping[int, float]], scope: Scope) -> bool:
        """
        Write the evolution of every method in ``consumption_evolution``.

        Both scope folders are created on every call so the layout on disk
        does not depend on which scopes had data.

        Args:
            consumption_evolution: Method name -> (Unix timestamp -> energy)
            scope: Selects the ``all`` or ``filtered`` folder

        Returns:
            True if the files were written, False if the folders could not be created

        Raises:
            OSError: If writing a method file fails
        """
        if not self.ensure_folders():
            return False

        for method_name, evolution in consumption_evolution.items():
            with self.result_sink.target(self.file_name(scope, method_name)) as out:
                for timestamp, energy in evolution.items():
                    out.write(str(timestamp), energy)

        logger.debug(
            f"Wrote {len(consumption_evolution)} {scope.value} evolution files "
            f"to {self.folder_for(scope)}"
        )
        return True
