"""
Configuration assembly.

Builds the single ``SupervisorConfig`` for a run by layering built-in
defaults, the optional TOML file and command-line overrides, in that
order. The result is handed to the coordinator explicitly; nothing is
cached at module level.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import SupervisorConfig
from ..validation import ErrorSeverity, handle_config_error
from .loader import find_default_config, load_supervisor_section
from .validators import validate_supervisor_config

logger = logging.getLogger(__name__)


def merge_settings(file_settings: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Layer command-line overrides on top of file settings.

    ``None`` and empty-list overrides mean "not given on the command line"
    and leave the file value in place.
    """
    merged = dict(file_settings)
    for key, value in overrides.items():
        if value is None or (isinstance(value, list) and not value):
            continue
        merged[key] = value
    return merged


def load_config(
    overrides: Dict[str, Any],
    config_path: Optional[Path] = None,
    cwd: Optional[Path] = None,
) -> SupervisorConfig:
    """
    Load and validate the configuration for one supervisor run.

    Args:
        overrides: Settings taken from the command line
        config_path: Explicit TOML file; when omitted ``devloop.toml`` in
            the working directory is used if present
        cwd: Working directory used to look up the default file

    Returns:
        Validated SupervisorConfig

    Raises:
        FileNotFoundError: If an explicit config file is missing
        ValidationError: If validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    path = config_path or find_default_config(cwd)
    file_settings: Dict[str, Any] = {}
    if path is not None:
        file_settings = load_supervisor_section(path)
    try:
        config = validate_supervisor_config(merge_settings(file_settings, overrides))
    except Exception as e:
        handle_config_error(
            error=e,
            context="validating settings",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise

    logger.debug(
        f"Configuration loaded: {len(config.sources)} sources, "
        f"{len(config.watch_dirs)} watch dirs, output {config.output}"
    )
    return config
