"""
devloop: rebuild-and-restart supervisor for the edit-compile-run loop.

devloop polls a set of source files, rebuilds an executable with an external
compiler when they change, and restarts the resulting process.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Input validation and error handling
- system: External command execution
- orchestration: Change scanner, builder, process supervisor and coordinator
- cli: Command-line interface

Usage:
    From command line:
        devloop [options] SOURCE... [-- CHILD_ARGS...]

    Programmatically:
        from devloop import Coordinator, load_config
        config = load_config({"sources": ["main.go"]})
        Coordinator.from_config(config).run()
"""

# Main interfaces
from .config import load_config
from .orchestration import (
    Builder,
    ChangeScanner,
    Coordinator,
    ProcessSupervisor,
    SignalHandler,
)
from .cli import main_cli

# Model classes for external use
from .models import (
    BuildResult,
    ExitEvent,
    SignalEvent,
    SupervisorConfig,
    SupervisorState,
)

# Validation utilities
from .validation import SpawnError, ValidationError

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "load_config",
    "Builder",
    "ChangeScanner",
    "Coordinator",
    "ProcessSupervisor",
    "SignalHandler",
    "main_cli",
    # Models
    "BuildResult",
    "ExitEvent",
    "SignalEvent",
    "SupervisorConfig",
    "SupervisorState",
    # Validation
    "SpawnError",
    "ValidationError",
]
