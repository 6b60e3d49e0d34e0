"""
Unit tests for logging configuration.
"""

import io
import logging

import pytest

from sidekick import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.unit
class TestSetupLogging:
    """Test cases for setup_logging()."""

    def test_explicit_level_and_stream(self, restore_root_logger):
        stream = io.StringIO()

        setup_logging("debug", stream=stream)
        logging.getLogger("sidekick.test").debug("probe started")

        assert logging.getLogger().level == logging.DEBUG
        assert "[DEBUG] sidekick.test:test_logging_setup.py:" in stream.getvalue()
        assert "probe started" in stream.getvalue()

    def test_level_from_config(self, restore_root_logger, config_files):
        from sidekick.config import set_config_path

        set_config_path(config_files["config"])
        setup_logging(stream=io.StringIO())

        assert logging.getLogger().level == logging.DEBUG
