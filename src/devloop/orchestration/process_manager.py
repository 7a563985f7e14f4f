"""
Process management for the orchestration module.

This module owns the lifecycle of the supervised child: starting the build
artifact with the supervisor's standard streams, killing it on request, and
reporting its exit from a background waiter thread.
"""

import logging
import queue
import subprocess
import threading
from pathlib import Path
from typing import List, Optional, Sequence

import psutil

from ..models.runtime import ExitEvent
from ..validation import SpawnError

logger = logging.getLogger(__name__)


class ProcessSupervisor:
    """
    Tracks at most one live child process.

    Every successful ``spawn()`` starts exactly one waiter thread. The
    waiter is the only caller of ``wait()`` on its process handle and puts
    exactly one ``ExitEvent`` on the event queue when the child exits,
    whether it exited on its own or was killed.
    """

    def __init__(self, executable: Path, events: queue.Queue, args: Sequence[str] = ()):
        self.executable = Path(executable)
        self.args = list(args)
        self.events = events
        self._process: Optional[subprocess.Popen] = None
        self._waiter: Optional[threading.Thread] = None

    @property
    def process(self) -> Optional[subprocess.Popen]:
        return self._process

    @property
    def has_child(self) -> bool:
        return self._process is not None

    def spawn(self) -> subprocess.Popen:
        """
        Start the build artifact as the tracked child.

        The child inherits stdin, stdout and stderr unchanged.

        Raises:
            SpawnError: If a child is already tracked or the artifact cannot
                be executed; no child is tracked afterwards in the latter case
        """
        if self._process is not None:
            raise SpawnError(
                f"{self.executable} is already running (PID {self._process.pid})",
                self.executable,
            )

        # The previous waiter has published its event by now; reap the thread
        # so a single waiter is ever outstanding.
        if self._waiter is not None:
            self._waiter.join()
            self._waiter = None

        logger.info(f"Starting {self.executable}")
        try:
            process = subprocess.Popen([str(self.executable), *self.args])
        except OSError as e:
            raise SpawnError(f"cannot start {self.executable}: {e}", self.executable) from e

        waiter = threading.Thread(
            target=self._wait_for_exit,
            args=(process,),
            name=f"ChildWaiter-{process.pid}",
            daemon=True,
        )
        self._process = process
        self._waiter = waiter
        waiter.start()
        logger.debug(f"Child started with PID {process.pid}")
        return process

    def kill(self) -> bool:
        """
        Forcibly kill the tracked child and its descendants.

        The handle is cleared before returning. Exit is not awaited here;
        it is reported through the event queue by the waiter thread.

        Returns:
            True if a child was tracked, False otherwise
        """
        process = self._process
        if process is None:
            return False
        self._process = None

        logger.info(f"Killing {self.executable} (PID {process.pid})")
        descendants = self._get_descendants(process)
        process.kill()
        for child in descendants:
            try:
                child.kill()
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied:
                logger.warning(f"Access denied killing descendant PID {child.pid}")
        return True

    def mark_exited(self, pid: int) -> None:
        """Forget the tracked handle once its exit has been observed."""
        if self._process is not None and self._process.pid == pid:
            self._process = None

    def _get_descendants(self, process: subprocess.Popen) -> List[psutil.Process]:
        # poll() returns None while the waiter thread is blocked in wait()
        if process.poll() is not None:
            return []
        try:
            return psutil.Process(process.pid).children(recursive=True)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return []

    def _wait_for_exit(self, process: subprocess.Popen) -> None:
        logger.debug(f"Waiting on {self.executable} (PID {process.pid})")
        try:
            event = ExitEvent(pid=process.pid, returncode=process.wait())
        except Exception as e:
            event = ExitEvent(pid=process.pid, returncode=None, error=e)
        self.events.put(event)
