"""
Configuration data models.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


DEFAULT_OUTPUT = "lr-bin"
DEFAULT_COMPILER = "go build"
DEFAULT_OUTPUT_FLAG = "-o"
DEFAULT_POLL_INTERVAL = 0.25


@dataclass
class SupervisorConfig:
    """
    Settings for one supervisor run, built once at startup.

    All paths are absolute by the time the config reaches the coordinator.
    """

    # Source files handed to the compiler and polled for changes.
    sources: List[Path]
    # The build artifact, overwritten in place by every successful build.
    output: Path
    # Extra directories polled for changes (never passed to the compiler).
    watch_dirs: List[Path] = field(default_factory=list)
    # Arguments forwarded verbatim to the child on every start.
    child_args: List[str] = field(default_factory=list)
    # Compiler command prefix, e.g. ["go", "build"].
    compiler: List[str] = field(default_factory=lambda: DEFAULT_COMPILER.split())
    # Flag introducing the output path on the compiler command line.
    output_flag: str = DEFAULT_OUTPUT_FLAG
    # Idle delay between coordinator iterations (seconds).
    poll_interval: float = DEFAULT_POLL_INTERVAL
    # Kill a still-running child after the loop ends.
    kill_on_exit: bool = True
    # Optional file receiving a record of every build.
    build_log: Optional[Path] = None
    log_level: str = "INFO"
