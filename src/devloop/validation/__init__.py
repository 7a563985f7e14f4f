"""
Validation and error handling for the devloop package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

# Core exception classes and error handling
from .exceptions import (
    ErrorSeverity,
    SpawnError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

# Validation functions
from .validators import (
    validate_absolute_path,
    validate_bool,
    validate_command,
    validate_enum_choice,
    validate_path_exists,
    validate_positive_float,
    validate_source_files,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "SpawnError",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "validate_absolute_path",
    "validate_bool",
    "validate_command",
    "validate_enum_choice",
    "validate_path_exists",
    "validate_positive_float",
    "validate_source_files",
]
