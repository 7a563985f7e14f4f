"""
Configuration management for the devloop package.

This module loads the optional TOML file, merges it with command-line
overrides and validates the result into a ``SupervisorConfig``.
"""

from .manager import load_config, merge_settings

from .loader import (
    find_default_config,
    load_supervisor_section,
    load_toml_file,
)
from .validators import validate_supervisor_config

__all__ = [
    # Main interface
    "load_config",
    "merge_settings",
    # Advanced interface
    "find_default_config",
    "load_supervisor_section",
    "load_toml_file",
    "validate_supervisor_config",
]
