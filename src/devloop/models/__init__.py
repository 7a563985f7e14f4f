"""
Data models for the devloop supervisor.

Configuration Models:
- Supervisor settings assembled from defaults, TOML and the command line

Runtime Models:
- Coordinator states
- Build results
- Events published to the coordinator (child exit, OS signal)
"""

# Configuration models
from .config import SupervisorConfig

# Runtime models
from .runtime import BuildResult, ExitEvent, SignalEvent, SupervisorState

__all__ = [
    # Configuration
    "SupervisorConfig",
    # Runtime
    "BuildResult",
    "ExitEvent",
    "SignalEvent",
    "SupervisorState",
]
