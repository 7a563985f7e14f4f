"""
Unit tests for signal interception.
"""

import os
import queue
import signal
import threading

import pytest

from devloop.models.runtime import SignalEvent
from devloop.orchestration.signal_handler import SignalHandler


@pytest.fixture
def events():
    return queue.Queue()


@pytest.mark.unit
class TestSignalHandler:
    """Test cases for SignalHandler."""

    def test_handler_publishes_event(self, events):
        handler = SignalHandler(events)

        handler._handle_signal(signal.SIGINT, None)

        event = events.get_nowait()
        assert event == SignalEvent(signal.SIGINT)
        assert event.name == "SIGINT"

    def test_one_event_per_signal(self, events):
        handler = SignalHandler(events)

        handler._handle_signal(signal.SIGINT, None)
        handler._handle_signal(signal.SIGTERM, None)

        assert events.get_nowait().signum == signal.SIGINT
        assert events.get_nowait().signum == signal.SIGTERM
        assert events.empty()

    def test_setup_and_cleanup_restore_originals(self, events):
        original_int = signal.getsignal(signal.SIGINT)
        original_term = signal.getsignal(signal.SIGTERM)
        handler = SignalHandler(events)

        handler.setup_signal_handlers()
        try:
            assert signal.getsignal(signal.SIGINT) == handler._handle_signal
            assert signal.getsignal(signal.SIGTERM) == handler._handle_signal
        finally:
            handler.cleanup_signal_handlers()

        assert signal.getsignal(signal.SIGINT) == original_int
        assert signal.getsignal(signal.SIGTERM) == original_term

    def test_delivered_signal_becomes_event(self, events):
        handler = SignalHandler(events)
        handler.setup_signal_handlers()
        try:
            os.kill(os.getpid(), signal.SIGTERM)
            event = events.get(timeout=5.0)
        finally:
            handler.cleanup_signal_handlers()

        assert event.signum == signal.SIGTERM
        assert event.name == "SIGTERM"

    def test_setup_outside_main_thread_is_tolerated(self, events):
        handler = SignalHandler(events)
        thread = threading.Thread(target=handler.setup_signal_handlers)
        thread.start()
        thread.join()

        assert handler._signal_handlers_set is False
        handler.cleanup_signal_handlers()

    def test_cleanup_without_setup_is_noop(self, events):
        original_int = signal.getsignal(signal.SIGINT)
        SignalHandler(events).cleanup_signal_handlers()

        assert signal.getsignal(signal.SIGINT) == original_int
