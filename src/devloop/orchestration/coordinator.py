"""
Coordinator for the build-run-restart loop.

This module contains the state machine that ties together change detection,
compiler invocation and child supervision. It runs on a single thread and is
the only mutator of the supervisor state, the scanner baseline and the child
handle; background producers only ever talk to it through the event queue.

State machine:
BUILDING → RUNNING ⇄ KILLING → BUILDING
RUNNING | KILLING → EXITING
"""

import logging
import queue
import time
from typing import Callable, Optional

from ..models.config import SupervisorConfig
from ..models.runtime import BuildResult, ExitEvent, SignalEvent, SupervisorState
from ..validation import ErrorSeverity, SpawnError, handle_error
from .builder import Builder
from .log_manager import BuildLog
from .process_manager import ProcessSupervisor
from .scanner import ChangeScanner
from .shared_state import SupervisorEvent, TimeoutConstants, new_event_queue

logger = logging.getLogger(__name__)


class Coordinator:
    """
    Drives the supervisor state machine.

    Each iteration in RUNNING or KILLING polls the change scanner once, waits
    briefly for a child-exit or signal event, then sleeps for the poll
    interval. BUILDING runs the compiler, starts the child on success and
    always moves on to RUNNING without delay.

    A failed build leaves RUNNING without a child: only the next change or
    a signal moves the loop forward from there.
    """

    def __init__(
        self,
        config: SupervisorConfig,
        scanner: ChangeScanner,
        builder: Builder,
        supervisor: ProcessSupervisor,
        events: "queue.Queue[SupervisorEvent]",
        build_log: Optional[BuildLog] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.scanner = scanner
        self.builder = builder
        self.supervisor = supervisor
        self.events = events
        self.build_log = build_log or BuildLog(None)
        self._sleep = sleep

        self.state = SupervisorState.BUILDING
        self.last_build: Optional[BuildResult] = None

    @classmethod
    def from_config(
        cls,
        config: SupervisorConfig,
        events: Optional["queue.Queue[SupervisorEvent]"] = None,
    ) -> "Coordinator":
        """Wire the scanner, builder and supervisor for one configuration."""
        events = events if events is not None else new_event_queue()
        scanner = ChangeScanner(
            config.sources,
            watch_dirs=config.watch_dirs,
            ignore=[config.output],
        )
        builder = Builder(
            config.compiler,
            config.output,
            config.sources,
            output_flag=config.output_flag,
        )
        supervisor = ProcessSupervisor(config.output, events, args=config.child_args)
        return cls(
            config,
            scanner,
            builder,
            supervisor,
            events,
            build_log=BuildLog(config.build_log),
        )

    def run(self) -> int:
        """
        Run the loop until EXITING is reached.

        Returns:
            Process exit status for a clean shutdown (always 0)
        """
        self.build_log.open()
        try:
            while self.state is not SupervisorState.EXITING:
                self.step()
        finally:
            self.shutdown()
        logger.info("Done running")
        return 0

    def step(self) -> SupervisorState:
        """Perform one loop iteration and return the resulting state."""
        if self.state is SupervisorState.BUILDING:
            self.state = self._build_and_spawn()
            return self.state

        if self.scanner.detect():
            self.state = self.on_change()

        event = self._next_event(TimeoutConstants.EVENT_WAIT_TIMEOUT)
        if event is not None:
            self.state = self.on_event(event)

        if self.state is not SupervisorState.EXITING:
            self._sleep(self.config.poll_interval)
        return self.state

    def on_change(self) -> SupervisorState:
        """Transition for a detected source change."""
        if self.state is SupervisorState.KILLING:
            logger.debug("Change detected while killing; waiting for the child to exit")
            return SupervisorState.KILLING
        if self.supervisor.kill():
            return SupervisorState.KILLING
        return SupervisorState.BUILDING

    def on_event(self, event: SupervisorEvent) -> SupervisorState:
        """Transition for a message taken from the event queue."""
        if isinstance(event, SignalEvent):
            logger.info(f"Signal: {event.name}")
            return SupervisorState.EXITING

        if isinstance(event, ExitEvent):
            self.supervisor.mark_exited(event.pid)
            if event.failed:
                logger.warning(f"Process exited: {event.describe()}")
            else:
                logger.info("Process exited without error")
            if self.state is SupervisorState.KILLING:
                return SupervisorState.BUILDING
            return SupervisorState.EXITING

        raise TypeError(f"Unexpected event type: {type(event).__name__}")

    def shutdown(self) -> None:
        """Release resources after the loop; optionally kill a remaining child."""
        if self.config.kill_on_exit and self.supervisor.kill():
            logger.info("Killed remaining child on exit")
        self.build_log.close()

    def _build_and_spawn(self) -> SupervisorState:
        logger.info("Building...")
        result = self.builder.build()
        self.last_build = result
        self.build_log.write_build_result(result)

        if result.success:
            try:
                self.supervisor.spawn()
            except SpawnError as e:
                handle_error(
                    error=e,
                    context="starting build artifact",
                    severity=ErrorSeverity.ERROR,
                    reraise=False,
                    logger=logger
                )
        return SupervisorState.RUNNING

    def _next_event(self, timeout: float) -> Optional[SupervisorEvent]:
        try:
            return self.events.get(timeout=timeout)
        except queue.Empty:
            return None
