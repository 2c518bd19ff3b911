"""
Validation and error handling for the joularpy package.

This module provides input validation and error handling with consistent
error reporting across the agent.
"""

from .exceptions import (
    ErrorSeverity,
    ResultSinkError,
    ValidationError,
    handle_config_error,
    handle_error,
    log_with_severity,
)
from .validators import (
    validate_boolean,
    validate_enum_choice,
    validate_non_empty_string,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "ResultSinkError",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "log_with_severity",
    # Validators
    "validate_boolean",
    "validate_enum_choice",
    "validate_non_empty_string",
]
