"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the optional
``devloop.toml`` file and the lookup of its default location.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ..validation import ErrorSeverity, ValidationError, handle_config_error

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "devloop.toml"
CONFIG_SECTION = "devloop"

# Keys holding paths; relative values are resolved against the config file's directory.
PATH_KEYS = ("output", "root", "build_log")
PATH_LIST_KEYS = ("sources", "watch_dirs")


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def find_default_config(cwd: Optional[Path] = None) -> Optional[Path]:
    """Return ``devloop.toml`` in the working directory if it exists."""
    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_supervisor_section(config_path: Path) -> Dict[str, Any]:
    """
    Load the ``[devloop]`` table of a configuration file.

    Relative paths in the table are made absolute against the directory
    holding the file, so the file behaves the same from any working
    directory.

    Raises:
        ValidationError: If the table is present but not a table
    """
    data = load_toml_file(config_path, "devloop configuration file")
    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ValidationError(
            f"[{CONFIG_SECTION}] in {config_path} must be a table",
            field_name=CONFIG_SECTION,
            value=section
        )

    config_dir = config_path.parent
    resolved = dict(section)
    for key in PATH_KEYS:
        value = resolved.get(key)
        if isinstance(value, str) and value and not Path(value).is_absolute():
            resolved[key] = str(config_dir / value)
    for key in PATH_LIST_KEYS:
        values = resolved.get(key)
        if isinstance(values, list):
            resolved[key] = [
                str(config_dir / v) if isinstance(v, str) and not Path(v).is_absolute() else v
                for v in values
            ]
    return resolved
