"""
Unit tests for the polling change scanner.
"""

import os
import time

import pytest

from devloop.orchestration.scanner import ChangeScanner


@pytest.mark.unit
class TestChangeScanner:
    """Test cases for baseline handling and change detection."""

    def test_no_change_is_never_reported(self, make_source):
        source = make_source("a.go", "package main\n")
        scanner = ChangeScanner([source])

        for _ in range(5):
            assert scanner.detect() is False
        assert scanner.last_changed is None

    def test_baseline_starts_at_construction_time(self, make_source):
        source = make_source("a.go", "package main\n")
        before = time.time_ns()
        scanner = ChangeScanner([source])
        after = time.time_ns()

        assert before <= scanner.baseline_ns <= after

    def test_change_advances_baseline_to_mtime(self, make_source, touch):
        source = make_source("a.go", "package main\n")
        scanner = ChangeScanner([source])
        mtime_ns = touch(source, 5)

        assert scanner.detect() is True
        assert scanner.baseline_ns == mtime_ns
        assert scanner.last_changed == source

        # No further change: nothing to report
        assert scanner.detect() is False
        assert scanner.baseline_ns == mtime_ns

    def test_older_mtime_never_lowers_baseline(self, make_source, touch):
        source = make_source("a.go", "package main\n")
        scanner = ChangeScanner([source])
        baseline = scanner.baseline_ns

        touch(source, -30)

        assert scanner.detect() is False
        assert scanner.baseline_ns == baseline

    def test_equal_mtime_is_not_a_change(self, make_source):
        source = make_source("a.go", "package main\n")
        scanner = ChangeScanner([source], baseline_ns=os.stat(source).st_mtime_ns)

        assert scanner.detect() is False

    def test_missing_file_is_skipped(self, make_source, touch, temp_dir):
        missing = temp_dir / "src" / "gone.go"
        source = make_source("a.go", "package main\n")
        scanner = ChangeScanner([missing, source])

        assert scanner.detect() is False

        touch(source, 5)
        assert scanner.detect() is True
        assert scanner.last_changed == source

    def test_first_changed_file_wins(self, make_source, touch):
        first = make_source("a.go", "package main\n")
        second = make_source("b.go", "package main\n")
        scanner = ChangeScanner([first, second])

        first_mtime = touch(first, 10)
        touch(second, 5)

        assert scanner.detect() is True
        assert scanner.last_changed == first
        assert scanner.baseline_ns == first_mtime

        # second is older than the new baseline, so it is not reported later
        assert scanner.detect() is False

    def test_later_change_in_second_file_is_reported_next(self, make_source, touch):
        first = make_source("a.go", "package main\n")
        second = make_source("b.go", "package main\n")
        scanner = ChangeScanner([first, second])

        touch(first, 5)
        second_mtime = touch(second, 10)

        assert scanner.detect() is True
        assert scanner.last_changed == first
        assert scanner.detect() is True
        assert scanner.last_changed == second
        assert scanner.baseline_ns == second_mtime
        assert scanner.detect() is False


@pytest.mark.unit
class TestDirectoryWatching:
    """Test cases for files discovered under watch directories."""

    @pytest.fixture
    def tree(self, temp_dir, make_source):
        source = make_source("main.go", "package main\n")
        pkg = temp_dir / "pkg"
        (pkg / "sub").mkdir(parents=True)
        (pkg / ".git").mkdir()
        files = {
            "nested": pkg / "sub" / "handler.go",
            "top": pkg / "model.go",
            "hidden_dir": pkg / ".git" / "config.go",
            "hidden_file": pkg / ".swap.go",
            "other_suffix": pkg / "notes.txt",
        }
        for path in files.values():
            path.write_text("x\n")
            os.utime(path, (time.time() - 60, time.time() - 60))
        return source, pkg, files

    def test_watched_files_order(self, tree):
        source, pkg, files = tree
        scanner = ChangeScanner([source], watch_dirs=[pkg])

        assert list(scanner.watched_files()) == [source, files["top"], files["nested"]]

    def test_nested_file_change_detected(self, tree, touch):
        source, pkg, files = tree
        scanner = ChangeScanner([source], watch_dirs=[pkg])

        touch(files["nested"], 5)

        assert scanner.detect() is True
        assert scanner.last_changed == files["nested"]

    @pytest.mark.parametrize("key", ["hidden_dir", "hidden_file", "other_suffix"])
    def test_skipped_entries_do_not_trigger(self, tree, touch, key):
        source, pkg, files = tree
        scanner = ChangeScanner([source], watch_dirs=[pkg])

        touch(files[key], 5)

        assert scanner.detect() is False

    def test_sources_without_suffix_watch_every_file(self, temp_dir, touch):
        source = temp_dir / "Makefile"
        source.write_text("all:\n")
        touch(source, -60)
        watched = temp_dir / "data"
        watched.mkdir()
        notes = watched / "notes.txt"
        notes.write_text("x\n")
        touch(notes, -60)
        scanner = ChangeScanner([source], watch_dirs=[watched])

        touch(notes, 5)

        assert scanner.detect() is True

    def test_ignored_output_is_never_watched(self, temp_dir, make_source, touch):
        source = make_source("main.go", "package main\n")
        output = temp_dir / "src" / "server.go"
        output.write_text("binary\n")
        scanner = ChangeScanner([source], watch_dirs=[source.parent], ignore=[output])

        touch(output, 5)

        assert scanner.detect() is False

    def test_missing_watch_dir_is_tolerated(self, temp_dir, make_source):
        source = make_source("main.go", "package main\n")
        scanner = ChangeScanner([source], watch_dirs=[temp_dir / "nope"])

        assert scanner.detect() is False

    def test_source_inside_watch_dir_listed_once(self, make_source):
        source = make_source("main.go", "package main\n")
        scanner = ChangeScanner([source], watch_dirs=[source.parent])

        assert list(scanner.watched_files()) == [source]
