"""
Shared types and constants for the orchestration module.

The coordinator consumes one event queue fed by two independent producers:
the per-child waiter thread (``ExitEvent``) and the OS signal handler
(``SignalEvent``).
"""

import queue
from typing import Union

from ..models.runtime import ExitEvent, SignalEvent

SupervisorEvent = Union[ExitEvent, SignalEvent]


def new_event_queue() -> "queue.Queue[SupervisorEvent]":
    """Create the fan-in queue shared by the coordinator and its producers."""
    return queue.Queue()


class TimeoutConstants:
    """
    Centralized timeout configuration.
    """
    # Bounded wait on the event queue in Running/Killing
    EVENT_WAIT_TIMEOUT = 0.05
