"""
Logging utilities for the joularpy package.
"""

from .formatter import JoularFormatter
from .logging_setup import PACKAGE_LOGGER, setup_logging

__all__ = ["JoularFormatter", "PACKAGE_LOGGER", "setup_logging"]
