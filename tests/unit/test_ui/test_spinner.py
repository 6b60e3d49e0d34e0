"""
Unit tests for the loading spinner.
"""

import io
import time

import pytest

from sidekick.ui import LoadingSpinner, with_spinner


@pytest.mark.unit
class TestLoadingSpinner:
    """Test cases for LoadingSpinner."""

    def test_start_and_stop_with_message(self):
        stream = io.StringIO()
        spinner = LoadingSpinner("Loading simulators", stream=stream, interval=0.01)

        spinner.start()
        assert spinner.running
        time.sleep(0.05)
        spinner.stop(message="Found 3 simulators")

        output = stream.getvalue()
        assert output.startswith("⠋ Loading simulators")
        assert output.endswith("\r\x1b[KFound 3 simulators\n")
        assert not spinner.running

    def test_stop_when_not_running(self):
        stream = io.StringIO()

        LoadingSpinner("Idle", stream=stream).stop()

        assert stream.getvalue() == ""

    def test_failure_line(self):
        stream = io.StringIO()
        spinner = LoadingSpinner("Probing", stream=stream)

        spinner.start()
        spinner.stop(success=False)

        assert stream.getvalue().endswith("❌ Probing\n")


@pytest.mark.unit
class TestWithSpinner:
    """Test cases for with_spinner()."""

    def test_returns_operation_result(self):
        stream = io.StringIO()

        assert with_spinner("Working", lambda: 42, stream=stream) == 42
        assert "❌" not in stream.getvalue()

    def test_propagates_errors(self):
        stream = io.StringIO()

        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            with_spinner("Working", fail, stream=stream)
        assert stream.getvalue().endswith("❌ Working\n")
