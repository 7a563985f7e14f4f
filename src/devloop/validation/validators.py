"""
Field validation functions for supervisor configuration.
"""

import os
import shlex
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from .exceptions import ValidationError


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a number within bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_bool(value: Any, field_name: str = "value") -> bool:
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_enum_choice(
    value: Any,
    valid_choices: Sequence[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Returns:
        The matching choice as spelled in ``valid_choices``

    Raises:
        ValidationError: If the value is not an allowed choice
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )
    for choice in valid_choices:
        if value == choice or (not case_sensitive and value.lower() == choice.lower()):
            return choice
    raise ValidationError(
        f"{field_name} must be one of {list(valid_choices)}, got '{value}'",
        field_name=field_name,
        value=value
    )


def validate_path_exists(path: Union[str, Path], field_name: str = "path") -> str:
    """
    Validate that a path exists.

    Raises:
        ValidationError: If path doesn't exist
    """
    path_str = str(path)
    if not os.path.exists(path_str):
        raise ValidationError(
            f"{field_name} does not exist: {path_str}",
            field_name=field_name,
            value=path_str
        )
    return path_str


def validate_absolute_path(
    path: Union[str, Path],
    base_dir: Optional[Path] = None,
    field_name: str = "path"
) -> Path:
    """
    Resolve a path to an absolute path.

    Relative paths are resolved against ``base_dir`` (the working directory
    when omitted). The path itself does not need to exist.

    Raises:
        ValidationError: If the path is empty or cannot be resolved
    """
    if path is None or not str(path).strip():
        raise ValidationError(
            f"{field_name} must be a non-empty path",
            field_name=field_name,
            value=path
        )
    try:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = (base_dir or Path.cwd()) / candidate
        return Path(os.path.abspath(candidate))
    except (OSError, RuntimeError, ValueError) as e:
        raise ValidationError(
            f"{field_name} cannot be resolved to an absolute path: {e}",
            field_name=field_name,
            value=path
        )


def validate_source_files(
    sources: Sequence[Union[str, Path]],
    field_name: str = "sources"
) -> List[Path]:
    """
    Validate the source list: at least one entry, each resolved to an
    absolute path. Sources that are missing right now are accepted; the
    change scanner skips them until they appear.

    Raises:
        ValidationError: If no sources are given
    """
    if not sources:
        raise ValidationError(
            "No source files",
            field_name=field_name,
            value=sources
        )
    return [
        validate_absolute_path(source, field_name=f"{field_name}[{i}]")
        for i, source in enumerate(sources)
    ]


def validate_command(command: Any, field_name: str = "command") -> List[str]:
    """
    Validate a command given either as a string (split with shell rules)
    or as a list of arguments.

    Raises:
        ValidationError: If the command is empty or malformed
    """
    if isinstance(command, str):
        try:
            parts = shlex.split(command)
        except ValueError as e:
            raise ValidationError(
                f"{field_name} is not a valid command line: {e}",
                field_name=field_name,
                value=command
            )
    elif isinstance(command, (list, tuple)) and all(isinstance(p, str) for p in command):
        parts = list(command)
    else:
        raise ValidationError(
            f"{field_name} must be a string or a list of strings",
            field_name=field_name,
            value=command
        )
    if not parts:
        raise ValidationError(
            f"{field_name} cannot be empty",
            field_name=field_name,
            value=command
        )
    return parts
