"""
Build log management.

When a build log path is configured, every compiler invocation is appended
to it so the full diagnostics of past builds survive scrolled-away terminal
output.
"""

import logging
import time
from pathlib import Path
from typing import IO, Any, Optional

from ..models.runtime import BuildResult

logger = logging.getLogger(__name__)


class BuildLog:
    """Appends one record per build to an optional log file."""

    def __init__(self, path: Optional[Path]):
        self.path = path
        self._file: Optional[IO[Any]] = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self) -> None:
        """
        Open the log file for appending. Does nothing when no path is set.

        Raises:
            IOError: If the file or its directory cannot be created
        """
        if self.path is None or self._file is not None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "a", encoding="utf-8")
        except OSError as e:
            raise IOError(f"Failed to open build log {self.path}: {e}") from e
        logger.info(f"Build output will be appended to {self.path}")

    def write_build_result(self, result: BuildResult) -> None:
        """
        Write one build record.

        Args:
            result: The build outcome, including the captured compiler output
        """
        if self._file is None:
            return
        stamp = time.strftime("%Y-%m-%d %H:%M:%S")
        status = "succeeded" if result.success else "failed"
        self._file.write(f"--- Build {status} at {stamp} ---\n")
        self._file.write(f"Command: {' '.join(result.command)}\n")
        self._file.write(f"Exit Code: {result.exit_code}\n")
        self._file.write(f"Elapsed: {result.elapsed:.3f}s\n\n")
        self._file.write(result.output)
        if result.output and not result.output.endswith("\n"):
            self._file.write("\n")
        self._file.write("\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as e:
            logger.warning(f"Failed to close build log {self.path}: {e}")
        finally:
            self._file = None
