"""
Pytest configuration and shared fixtures for the devloop test suite.

This module provides common fixtures, a fake compiler, and helpers for
manipulating file modification times.
"""

import os
import shutil
import stat
import sys
import tempfile
import time
from pathlib import Path
from typing import Callable

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# The fake compiler concatenates its sources into an executable output file
# and fails when any source contains SYNTAX_ERROR. Each invocation is
# recorded in calls.log next to the script.
FAKE_COMPILER = """#!/bin/sh
echo "$@" >> "$(dirname "$0")/calls.log"
if [ "$1" != "-o" ]; then
    echo "usage: fakecc -o OUT SRC..." >&2
    exit 2
fi
out="$2"
shift 2
if grep -q SYNTAX_ERROR "$@"; then
    echo "fakecc: syntax error in sources" >&2
    exit 1
fi
echo "fakecc: compiling $# files"
cat "$@" > "$out.tmp" && chmod +x "$out.tmp" && mv "$out.tmp" "$out"
"""


# ============================================================================
# Helpers
# ============================================================================


def write_executable(path: Path, body: str) -> Path:
    """Write a shell script and mark it executable."""
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def set_mtime(path: Path, offset: float) -> int:
    """Set a file's modification time relative to now; returns it in ns."""
    when = time.time() + offset
    os.utime(path, (when, when))
    return os.stat(path).st_mtime_ns


def wait_for(predicate: Callable[[], bool], timeout: float = 10.0, interval: float = 0.02) -> bool:
    """Poll until predicate() is true or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def fake_compiler(temp_dir):
    """Install the fake compiler in its own directory and return its path."""
    tools_dir = temp_dir / "tools"
    tools_dir.mkdir()
    return write_executable(tools_dir / "fakecc", FAKE_COMPILER)


@pytest.fixture
def compiler_calls(fake_compiler):
    """Return a callable listing the recorded fake compiler invocations."""
    log_path = fake_compiler.parent / "calls.log"

    def _calls():
        if not log_path.exists():
            return []
        return log_path.read_text().splitlines()

    return _calls


@pytest.fixture
def make_source(temp_dir):
    """Factory writing a source file whose mtime lies safely in the past."""
    src_dir = temp_dir / "src"
    src_dir.mkdir()

    def _make(name: str, content: str) -> Path:
        path = src_dir / name
        path.write_text(content)
        set_mtime(path, -60)
        return path

    return _make


@pytest.fixture
def sample_config_data(temp_dir):
    """Raw settings as they arrive from TOML and the command line."""
    return {
        "sources": [str(temp_dir / "main.go"), str(temp_dir / "util.go")],
        "output": "bin/server",
        "root": str(temp_dir),
        "watch_dirs": [str(temp_dir / "internal")],
        "child_args": ["--port", "8080"],
        "compiler": "go build -v",
        "output_flag": "-o",
        "poll_interval": 0.1,
        "kill_on_exit": True,
        "build_log": str(temp_dir / "build.log"),
        "log_level": "debug",
    }


@pytest.fixture
def write_script():
    """Expose write_executable to tests."""
    return write_executable


@pytest.fixture
def touch():
    """Expose set_mtime to tests."""
    return set_mtime


@pytest.fixture
def poll_until():
    """Expose wait_for to tests."""
    return wait_for
