"""
Unit tests for the data models.
"""

import pytest

from sidekick.models import (
    PlatformRequest,
    ProcessInvocation,
    RunResult,
    SavedTargets,
    SimulatorDevice,
    generic_destination_args,
)


@pytest.mark.unit
class TestPlatformRequest:
    """Test cases for PlatformRequest.parse()."""

    @pytest.mark.parametrize("value,expected", [
        ("ios-sim", PlatformRequest.SIMULATOR),
        ("ios-device", PlatformRequest.DEVICE),
        ("macos", PlatformRequest.DESKTOP),
        ("Device", PlatformRequest.DEVICE),
    ])
    def test_parse(self, value, expected):
        assert PlatformRequest.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError) as exc_info:
            PlatformRequest.parse("android")

        assert "ios-sim" in str(exc_info.value)

    def test_generic_destinations(self):
        assert generic_destination_args(PlatformRequest.DEVICE)[-1] == "generic/platform=iOS"
        assert generic_destination_args(PlatformRequest.DESKTOP) == [
            "-sdk", "macosx", "-destination", "platform=macOS",
        ]


@pytest.mark.unit
class TestSavedTargets:
    """Test cases for SavedTargets."""

    def test_from_camel_case_mapping(self):
        saved = SavedTargets.from_mapping({
            "deviceUDID": "D1", "deviceName": "Phone-X",
            "simulatorUDID": "S1", "simulatorName": "SIM1",
        })

        assert saved == SavedTargets("D1", "Phone-X", "S1", "SIM1")
        assert saved.has_device and saved.has_simulator

    def test_from_snake_case_mapping(self):
        saved = SavedTargets.from_mapping({"simulator_id": "S1", "simulator_name": "SIM1"})

        assert not saved.has_device
        assert saved.has_simulator

    def test_empty_mapping(self):
        assert SavedTargets.from_mapping(None) == SavedTargets()

    def test_identifier_without_name_is_not_usable(self):
        assert not SavedTargets(device_id="D1").has_device
        assert not SavedTargets(simulator_id="", simulator_name="SIM1").has_simulator


@pytest.mark.unit
class TestProcessModels:
    """Test cases for the process models."""

    def test_invocation_argv(self):
        invocation = ProcessInvocation("/usr/bin/xcodebuild", ("-list",))

        assert invocation.argv == ["/usr/bin/xcodebuild", "-list"]
        assert invocation.describe() == "/usr/bin/xcodebuild -list"

    def test_result_without_raw_log(self):
        result = RunResult(exit_code=0, stdout="a", stderr="b")

        assert result.combined_output == "ab"
        assert result.raise_for_status() is result

    def test_simulator_from_json(self):
        device = SimulatorDevice.from_json({
            "name": "iPhone 15", "udid": "U", "state": "Booted", "isAvailable": True,
        })

        assert device.usable
        assert device.is_booted
