"""
Exception types and error reporting helpers.

This module provides the error vocabulary shared by the configuration layer,
the result sinks and the shutdown orchestration.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    This is the main exception type used by the configuration validators.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ResultSinkError(OSError):
    """
    Raised when a result sink cannot open, write or finalize a target.

    Subclasses OSError so callers handle it together with plain I/O failures.
    """

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.target = target


def log_with_severity(
    message: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    logger: Optional[logging.Logger] = None,
    exc_info: bool = False,
) -> None:
    """
    Log a message at the level matching the given severity.

    Args:
        message: Message to log
        severity: Severity level, as an ErrorSeverity or its string value
        logger: Logger instance to use (defaults to module logger)
        exc_info: Whether to attach the current exception traceback
    """
    effective_logger = logger or globals()['logger']

    # Handle both enum and string severity values
    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    level = getattr(logging, severity_str.upper(), logging.ERROR)
    effective_logger.log(level, message, exc_info=exc_info)


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    severity_str = severity.lower() if isinstance(severity, str) else severity.value

    log_with_severity(
        f"Error in {context}: {error}",
        severity=severity_str,
        logger=logger,
        exc_info=severity_str in ("debug", "critical"),
    )

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)
