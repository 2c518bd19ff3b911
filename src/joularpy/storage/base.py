"""
Abstract base class for result sink implementations.

A result sink persists named datasets of ``(key, value)`` rows. It holds a
single target slot: a target is opened, rows are written to it, and it is
closed before the next one may be opened. Backends only decide how a
finished target is laid out on disk.

The interface includes methods for:
- Opening, writing and closing a target, or doing all three through the
  ``target()`` context manager
- Reading a finished target back
- Checking target existence
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from ..validation import ResultSinkError

logger = logging.getLogger(__name__)

Row = Tuple[str, float]


class ResultSink(ABC):
    """Abstract base class for result sinks."""

    #: Appended to every target name to form the file name.
    extension: str = ""

    def __init__(self, output_dir: Union[str, Path] = "."):
        """
        Args:
            output_dir: Directory against which relative target names are resolved
        """
        self.output_dir = Path(output_dir)
        self._target_path: Optional[Path] = None
        self._rows: List[Row] = []

    @property
    def current_target(self) -> Optional[Path]:
        """Path of the open target, or None when the slot is free."""
        return self._target_path

    def resolve(self, name: Union[str, Path]) -> Path:
        """
        Map a target name to the file it is stored in.

        Args:
            name: Target name, absolute or relative to ``output_dir``

        Returns:
            Full file path including the backend extension
        """
        path = Path(name)
        if not path.is_absolute():
            path = self.output_dir / path
        # Names may contain dots (qualified method names), so never use with_suffix
        return path.with_name(path.name + self.extension)

    def set_target(self, name: Union[str, Path]) -> Path:
        """
        Open a target. An existing file of that name is truncated when the target closes.

        Args:
            name: Target name

        Returns:
            Resolved path of the target

        Raises:
            ResultSinkError: If another target is still open
        """
        if self._target_path is not None:
            raise ResultSinkError(
                f"Cannot open target {name}: {self._target_path} is still open",
                target=str(name),
            )
        self._target_path = self.resolve(name)
        self._rows = []
        logger.debug(f"Opened result target {self._target_path}")
        return self._target_path

    def write(self, key: str, value: float) -> None:
        """
        Append one row to the open target.

        Raises:
            ResultSinkError: If no target is open
        """
        if self._target_path is None:
            raise ResultSinkError(f"Cannot write row {key!r}: no target is open")
        self._rows.append((str(key), float(value)))

    def close_target(self) -> None:
        """
        Persist the rows of the open target and free the slot.

        The slot is freed even when persisting fails. ``output_dir`` is
        created if needed, but the folder of a nested or absolute target
        must already exist.

        Raises:
            ResultSinkError: If the rows cannot be written
        """
        if self._target_path is None:
            return

        path, rows = self._target_path, self._rows
        self._target_path = None
        self._rows = []

        try:
            # Only the output folder is created; nested folders must already exist
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self._write_rows(path, rows)
        except ResultSinkError:
            raise
        except Exception as e:
            logger.error(f"Failed to write {len(rows)} rows to {path}: {e}")
            raise ResultSinkError(f"Failed to write {path}: {e}", target=str(path)) from e

        logger.debug(f"Wrote {len(rows)} rows to {path}")

    def abort_target(self) -> None:
        """Drop the open target without writing anything."""
        if self._target_path is not None:
            logger.debug(f"Discarding result target {self._target_path}")
        self._target_path = None
        self._rows = []

    @contextmanager
    def target(self, name: Union[str, Path]) -> Iterator["ResultSink"]:
        """
        Open ``name`` for the duration of a ``with`` block.

        The target is closed when the block exits normally and discarded
        when it raises, so the slot is always released.

        Example:
            with sink.target("joularJX-42-all-methods-energy") as out:
                for method, energy in energies.items():
                    out.write(method, energy)
        """
        self.set_target(name)
        try:
            yield self
        except BaseException:
            self.abort_target()
            raise
        self.close_target()

    def target_exists(self, name: Union[str, Path]) -> bool:
        """Check whether a finished target is present on disk."""
        return self.resolve(name).exists()

    def read_target(self, name: Union[str, Path]) -> List[Row]:
        """
        Load the rows of a finished target.

        Raises:
            ResultSinkError: If the target cannot be read
        """
        path = self.resolve(name)
        try:
            return self._read_rows(path)
        except Exception as e:
            raise ResultSinkError(f"Failed to read {path}: {e}", target=str(path)) from e

    @abstractmethod
    def _write_rows(self, path: Path, rows: List[Row]) -> None:
        """
        Write ``rows`` to ``path``, replacing any previous content.

        Args:
            path: Resolved file path
            rows: Rows in write order
        """
        pass

    @abstractmethod
    def _read_rows(self, path: Path) -> List[Row]:
        """
        Read all rows stored at ``path``.

        Args:
            path: Resolved file path

        Returns:
            Rows in file order
        """
        pass
