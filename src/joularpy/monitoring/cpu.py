"""
Abstract interface for the power-sampling resource.

Concrete implementations (RAPL readers, external power meters, ...) live with
the sampling code. The shutdown stage only needs to release them.
"""

from abc import ABC, abstractmethod


class Cpu(ABC):
    """A monitoring resource that holds OS handles until closed."""

    @abstractmethod
    def close(self) -> None:
        """
        Release every handle held by the implementation.

        May raise if the underlying device is busy or already gone.
        """
        pass
