"""
Signal handling for the orchestration module.

Interrupt and terminate signals are turned into ``SignalEvent`` messages on
the coordinator's event queue instead of interrupting the main thread.
"""

import logging
import queue
import signal
from typing import Any, Dict, Tuple

from ..models.runtime import SignalEvent

logger = logging.getLogger(__name__)


class SignalHandler:
    """
    Manages signal registration and cleanup for one coordinator.

    Handlers can only be installed from the main thread. SIGKILL cannot be
    intercepted and is not listed.
    """

    SIGNALS: Tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)

    def __init__(self, events: queue.Queue):
        self.events = events
        self._original_handlers: Dict[int, Any] = {}
        self._signal_handlers_set = False

    def setup_signal_handlers(self) -> None:
        """Install handlers, remembering the originals."""
        try:
            for signum in self.SIGNALS:
                self._original_handlers[signum] = signal.signal(signum, self._handle_signal)
            self._signal_handlers_set = True
            logger.debug("Signal handlers set up for coordinator")
        except ValueError as e:
            # signal.signal outside the main thread
            logger.warning(f"Failed to set up signal handlers: {e}")

    def cleanup_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        if not self._signal_handlers_set:
            return

        try:
            for signum, handler in self._original_handlers.items():
                if handler is not None:
                    signal.signal(signum, handler)
            logger.debug("Signal handlers restored")
        except ValueError as e:
            logger.warning(f"Failed to restore signal handlers: {e}")
        finally:
            self._original_handlers.clear()
            self._signal_handlers_set = False

    def _handle_signal(self, signum: int, frame: Any) -> None:
        """Publish one event per delivered signal."""
        self.events.put_nowait(SignalEvent(signum))
