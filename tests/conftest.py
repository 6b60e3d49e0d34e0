"""
Pytest configuration and shared fixtures for the Sidekick test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the Sidekick project.
"""

import os
import sys
import tempfile
import shutil
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import Mock

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
    config.addinivalue_line("markers", "slow: mark test as slow running")


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
def python_script(temp_dir):
    """Write a Python script and return the argument list that runs it."""

    def create(body: str, name: str = "script.py") -> List[str]:
        script = temp_dir / name
        script.write_text(body)
        return [str(script)]

    return create


@pytest.fixture
def executable_script(temp_dir):
    """Write a directly executable Python script and return its path."""

    def create(body: str, name: str = "tool") -> str:
        script = temp_dir / name
        script.write_text(f"#!{sys.executable}\n{body}")
        os.chmod(script, 0o755)
        return str(script)

    return create


@pytest.fixture
def tracker(temp_dir):
    """A temp file tracker rooted in the test directory, with no process hooks."""
    from sidekick.system import TempResourceTracker

    exit_func = Mock()
    tracker = TempResourceTracker(directory=temp_dir, install_hooks=False, exit_func=exit_func)
    yield tracker
    tracker.cleanup_all()


@pytest.fixture
def sample_engine_data() -> Dict[str, Any]:
    """Sample `[engine]` table for testing."""
    return {
        "log_level": "DEBUG",
        "build_tool": "/usr/bin/xcodebuild",
        "locator": "/usr/bin/xcrun",
        "formatter_name": "xcbeautify",
        "formatter_candidates": ["/opt/homebrew/bin/xcbeautify"],
        "use_formatter": False,
        "probe_timeout_seconds": 2.5,
        "target_family": "ipad",
        "chunk_size": 1024,
    }


@pytest.fixture
def simctl_payload() -> Dict[str, Any]:
    """Sample `simctl list -j devices` output."""
    return {
        "devices": {
            "com.apple.CoreSimulator.SimRuntime.iOS-9-3": [
                {"name": "iPhone 6", "udid": "OLD-6", "state": "Shutdown", "isAvailable": True},
            ],
            "com.apple.CoreSimulator.SimRuntime.iOS-17-0": [
                {"name": "iPhone 15", "udid": "NEW-15", "state": "Shutdown", "isAvailable": True},
                {"name": "iPad Air", "udid": "NEW-AIR", "state": "Shutdown", "isAvailable": True},
                {"name": "iPhone 14", "udid": "BROKEN-14", "state": "Shutdown",
                 "isAvailable": False, "availabilityError": "runtime profile not found"},
            ],
            "com.apple.CoreSimulator.SimRuntime.watchOS-10-0": [],
        }
    }


@pytest.fixture
def devicectl_payload():
    """Build a `devicectl list devices` document for one device."""

    def create(device_id: str, transport: str = "wired") -> Dict[str, Any]:
        return {
            "result": {
                "devices": [
                    {
                        "identifier": "COREDEVICE-UUID",
                        "hardwareProperties": {"udid": device_id},
                        "connectionProperties": {"transportType": transport},
                    }
                ]
            }
        }

    return create


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def config_files(temp_dir, sample_engine_data):
    """Create a temporary configuration file for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump({"engine": sample_engine_data}, f)

    return {
        "config": config_file,
        "dir": temp_dir,
    }


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    from sidekick.config import clear_config_cache, get_config_path, set_config_path

    original_config_path = get_config_path()

    yield  # Run the test

    clear_config_cache()
    set_config_path(original_config_path)
