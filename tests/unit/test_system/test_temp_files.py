"""
Unit tests for temp file tracking and cleanup.
"""

import signal
from pathlib import Path
from unittest.mock import Mock

import pytest

from sidekick.system import TempResourceTracker


@pytest.mark.unit
class TestTempResourceTracker:
    """Test cases for TempResourceTracker."""

    def test_create_reserves_unique_tracked_path(self, tracker, temp_dir):
        """create() returns a fresh path under the tracker directory without creating it."""
        first = tracker.create("devicectl", "json")
        second = tracker.create("devicectl", ".json")

        assert first != second
        assert first.parent == temp_dir
        assert first.name.startswith("devicectl-")
        assert first.suffix == ".json"
        assert second.suffix == ".json"
        assert not first.exists()
        assert tracker.tracked == {str(first), str(second)}

    def test_create_without_extension(self, tracker):
        path = tracker.create("scratch", "")

        assert path.suffix == ""

    def test_remove_deletes_and_untracks(self, tracker):
        path = tracker.create("probe", "json")
        path.write_text("{}")

        tracker.remove(path)

        assert not path.exists()
        assert tracker.tracked == set()

    def test_remove_is_idempotent(self, tracker):
        """Removing a path twice, or a path that was never written, is not an error."""
        path = tracker.create("probe", "json")

        tracker.remove(path)
        tracker.remove(path)

        assert tracker.tracked == set()

    def test_cleanup_all_tolerates_missing_files(self, tracker):
        """Files deleted by someone else do not stop the sweep."""
        written = tracker.create("a", "json")
        written.write_text("{}")
        vanished = tracker.create("b", "json")
        vanished.write_text("{}")
        vanished.unlink()
        never_written = tracker.create("c", "json")

        tracker.cleanup_all()

        assert not written.exists()
        assert not never_written.exists()
        assert tracker.tracked == set()

    @pytest.mark.parametrize("signum,status", [
        (signal.SIGINT, 130),
        (signal.SIGTERM, 143),
    ])
    def test_signal_cleans_up_then_exits(self, temp_dir, signum, status):
        """A termination signal sweeps tracked files and exits with 128 + signal."""
        exit_func = Mock()
        tracker = TempResourceTracker(directory=temp_dir, install_hooks=False, exit_func=exit_func)
        path = tracker.create("probe", "json")
        path.write_text("{}")

        tracker._on_signal(signum)

        assert not path.exists()
        assert tracker.tracked == set()
        exit_func.assert_called_once_with(status)

    def test_install_registers_and_uninstall_restores_handlers(self, temp_dir):
        """Hooks are installed on first create() and removed again by uninstall()."""
        original = signal.getsignal(signal.SIGTERM)
        tracker = TempResourceTracker(directory=temp_dir, exit_func=Mock())

        try:
            tracker.create("probe", "json")
            assert signal.getsignal(signal.SIGTERM) != original
        finally:
            tracker.uninstall()

        assert signal.getsignal(signal.SIGTERM) == original

    def test_context_manager_cleans_up(self, temp_dir):
        with TempResourceTracker(directory=temp_dir, install_hooks=False) as tracker:
            path = tracker.create("scoped", "txt")
            path.write_text("data")

        assert not Path(path).exists()
        assert tracker.tracked == set()
