"""
Orchestration module for the devloop supervisor.

Components:
- ChangeScanner: Polls modification times of watched files
- Builder: Invokes the external compiler
- ProcessSupervisor: Starts, kills and awaits the supervised child
- SignalHandler: Turns OS signals into coordinator events
- BuildLog: Optional per-build log file
- Coordinator: The build-run-restart state machine
"""

from .builder import Builder
from .coordinator import Coordinator
from .log_manager import BuildLog
from .process_manager import ProcessSupervisor
from .scanner import ChangeScanner
from .shared_state import SupervisorEvent, TimeoutConstants, new_event_queue
from .signal_handler import SignalHandler

__all__ = [
    "Builder",
    "BuildLog",
    "ChangeScanner",
    "Coordinator",
    "ProcessSupervisor",
    "SignalHandler",
    "SupervisorEvent",
    "TimeoutConstants",
    "new_event_queue",
]
