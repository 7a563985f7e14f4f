"""
Supervisor configuration validation.

Turns a merged mapping of raw settings (defaults, TOML table, command-line
overrides) into a validated ``SupervisorConfig``.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..models.config import (
    DEFAULT_COMPILER,
    DEFAULT_OUTPUT,
    DEFAULT_OUTPUT_FLAG,
    DEFAULT_POLL_INTERVAL,
    SupervisorConfig,
)
from ..validation import (
    ValidationError,
    validate_absolute_path,
    validate_bool,
    validate_command,
    validate_enum_choice,
    validate_path_exists,
    validate_positive_float,
    validate_source_files,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
KNOWN_KEYS = {
    "sources", "output", "root", "watch_dirs", "child_args", "compiler",
    "output_flag", "poll_interval", "kill_on_exit", "build_log", "log_level",
}


def _validate_string_list(value: Any, field_name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValidationError(
            f"{field_name} must be a list of strings",
            field_name=field_name,
            value=value
        )
    return list(value)


def validate_supervisor_config(data: Dict[str, Any]) -> SupervisorConfig:
    """
    Validate and create a SupervisorConfig from raw configuration data.

    Args:
        data: Merged raw settings; missing keys take their defaults

    Returns:
        Validated SupervisorConfig instance

    Raises:
        ValidationError: If validation fails
    """
    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

    sources = validate_source_files(
        _validate_string_list(data.get("sources"), "sources"),
        field_name="sources",
    )

    root = data.get("root")
    if root:
        root_path = validate_absolute_path(root, field_name="root")
        validate_path_exists(root_path, field_name="root")
    else:
        root_path = None

    output_value = data.get("output", DEFAULT_OUTPUT)
    if not output_value:
        raise ValidationError("No output file", field_name="output", value=output_value)
    output = validate_absolute_path(output_value, base_dir=root_path, field_name="output")
    if output in sources:
        raise ValidationError(
            f"output {output} cannot also be a source file",
            field_name="output",
            value=output_value
        )

    watch_dirs = [
        validate_absolute_path(d, field_name=f"watch_dirs[{i}]")
        for i, d in enumerate(_validate_string_list(data.get("watch_dirs"), "watch_dirs"))
    ]
    for d in watch_dirs:
        if not d.is_dir():
            logger.warning(f"Watch directory {d} does not exist yet; it will be polled anyway")

    child_args = _validate_string_list(data.get("child_args"), "child_args")

    compiler = validate_command(data.get("compiler", DEFAULT_COMPILER), field_name="compiler")

    output_flag = data.get("output_flag", DEFAULT_OUTPUT_FLAG)
    if not isinstance(output_flag, str):
        raise ValidationError(
            "output_flag must be a string",
            field_name="output_flag",
            value=output_flag
        )

    poll_interval = validate_positive_float(
        data.get("poll_interval", DEFAULT_POLL_INTERVAL),
        min_value=0.01,  # 10ms minimum
        max_value=10.0,
        field_name="poll_interval",
    )

    kill_on_exit = validate_bool(data.get("kill_on_exit", True), field_name="kill_on_exit")

    build_log_value = data.get("build_log")
    build_log = (
        validate_absolute_path(build_log_value, field_name="build_log")
        if build_log_value else None
    )

    log_level = validate_enum_choice(
        data.get("log_level", "INFO"),
        valid_choices=LOG_LEVELS,
        field_name="log_level",
        case_sensitive=False,
    )

    return SupervisorConfig(
        sources=sources,
        output=output,
        watch_dirs=watch_dirs,
        child_args=child_args,
        compiler=compiler,
        output_flag=output_flag,
        poll_interval=poll_interval,
        kill_on_exit=kill_on_exit,
        build_log=build_log,
        log_level=log_level,
    )
