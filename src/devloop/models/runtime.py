"""
Runtime data models.

This module contains the coordinator state enumeration, the result of a
single compiler invocation, and the event types delivered to the
coordinator's event queue by background producers.
"""

import signal
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SupervisorState(Enum):
    """Coordinator states, entered once per build-run-restart cycle."""
    BUILDING = "building"
    RUNNING = "running"
    KILLING = "killing"
    EXITING = "exiting"


@dataclass
class BuildResult:
    """
    Outcome of one compiler invocation.

    The captured output is opaque: it is shown to the operator and written
    to the build log, never parsed.
    """

    success: bool
    exit_code: int
    output: str
    elapsed: float
    command: List[str] = field(default_factory=list)


@dataclass
class ExitEvent:
    """Published exactly once by the waiter thread of each spawned child."""

    pid: int
    returncode: Optional[int]
    error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None or self.returncode != 0

    def describe(self) -> str:
        if self.error is not None:
            return f"wait failed: {self.error}"
        if self.returncode is not None and self.returncode < 0:
            try:
                name = signal.Signals(-self.returncode).name
            except ValueError:
                name = str(-self.returncode)
            return f"killed by signal {name}"
        return f"exit status {self.returncode}"


@dataclass
class SignalEvent:
    """Published by the signal handler for every intercepted signal."""

    signum: int

    @property
    def name(self) -> str:
        try:
            return signal.Signals(self.signum).name
        except ValueError:
            return str(self.signum)
