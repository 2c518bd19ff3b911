"""
Value validation functions used by the configuration layer.
"""

from typing import Any, List

from .exceptions import ValidationError


def validate_boolean(value: Any, field_name: str = "value") -> bool:
    """
    Validate that a value is a real boolean.

    TOML booleans parse to bool, so strings such as "true" are rejected
    rather than guessed at.

    Args:
        value: Value to validate
        field_name: Name of the field being validated

    Returns:
        Validated boolean value

    Raises:
        ValidationError: If value is not a bool
    """
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """
    Validate that a value is a non-blank string.

    Args:
        value: Value to validate
        field_name: Name of the field being validated

    Returns:
        The string, stripped of surrounding whitespace

    Raises:
        ValidationError: If value is not a string or is blank
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        Validated choice, in the spelling used by ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    # Return the original case from valid choices
    return choices[lower_choices.index(lower_value)]
