"""
Change detection by polling modification times.
"""

import logging
import os
import time
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Set

logger = logging.getLogger(__name__)


class ChangeScanner:
    """
    Reports whether any watched file was modified after the baseline.

    The baseline starts at construction time and only ever moves forward:
    it is advanced to the modification time of the first file found newer
    than it. Timestamps are compared in nanoseconds.

    Watched files are the configured sources, in order, followed by the
    files found under the watch directories. Directory files are only
    considered when their suffix matches one of the sources' suffixes
    (any suffix when no source has one); hidden entries and ignored paths
    are skipped.
    """

    def __init__(
        self,
        sources: Sequence[Path],
        watch_dirs: Sequence[Path] = (),
        ignore: Iterable[Path] = (),
        baseline_ns: Optional[int] = None,
    ):
        self.sources = tuple(Path(s) for s in sources)
        self.watch_dirs = tuple(Path(d) for d in watch_dirs)
        self.baseline_ns = time.time_ns() if baseline_ns is None else baseline_ns
        self.last_changed: Optional[Path] = None

        self._ignore: Set[str] = {os.path.abspath(p) for p in ignore}
        self._source_set: Set[str] = {os.path.abspath(s) for s in self.sources}
        self._suffixes: Set[str] = {s.suffix for s in self.sources if s.suffix}

    @property
    def baseline(self) -> float:
        """Baseline as seconds since the epoch."""
        return self.baseline_ns / 1e9

    def detect(self) -> bool:
        """
        Check the watched files once.

        Returns True as soon as one file's modification time is strictly
        after the baseline, after moving the baseline to that time. Files
        that cannot be stat'ed are skipped.
        """
        for path in self.watched_files():
            try:
                mtime_ns = os.stat(path).st_mtime_ns
            except OSError:
                continue
            if mtime_ns > self.baseline_ns:
                self.baseline_ns = mtime_ns
                self.last_changed = path
                logger.info(f"Changed: {path}")
                return True
        return False

    def watched_files(self) -> Iterator[Path]:
        for source in self.sources:
            if os.path.abspath(source) not in self._ignore:
                yield source
        for directory in self.watch_dirs:
            yield from self._scan_directory(directory)

    def _scan_directory(self, directory: Path) -> Iterator[Path]:
        # os.walk silently yields nothing for a missing directory
        for dirpath, dirnames, filenames in os.walk(directory):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            for name in sorted(filenames):
                if name.startswith("."):
                    continue
                if self._suffixes and os.path.splitext(name)[1] not in self._suffixes:
                    continue
                full = os.path.abspath(os.path.join(dirpath, name))
                if full in self._ignore or full in self._source_set:
                    continue
                yield Path(full)
