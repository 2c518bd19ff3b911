"""
Logging setup for the joularpy package logger.
"""

import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

from .formatter import JoularFormatter

PACKAGE_LOGGER = "joularpy"


def setup_logging(
    level: Union[str, int] = "INFO",
    stream: Optional[IO[str]] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Attach JoularFormatter handlers to the package logger.

    Calling it again replaces the handlers installed by a previous call
    instead of stacking new ones.

    Args:
        level: Level name or number for the package logger
        stream: Stream for console output, defaults to stdout
        log_file: Optional file that receives the same lines

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(package_logger.handlers):
        if getattr(handler, "_joularpy_handler", False):
            package_logger.removeHandler(handler)
            handler.close()

    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = JoularFormatter()
    for handler in handlers:
        # The formatter terminates each line itself
        handler.terminator = ""
        handler.setFormatter(formatter)
        handler._joularpy_handler = True
        package_logger.addHandler(handler)

    return package_logger
