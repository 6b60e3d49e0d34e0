"""
Integration tests for a complete build flow.

Resolves a destination, runs a build tool through the pipeline with a
formatter, and persists the logs of a failed run, using small Python
programs in place of the real toolchain.
"""

import io
import sys
from unittest.mock import Mock

import pytest

from sidekick.executor import StreamingPipeline, format_failure_report, write_logs
from sidekick.models import LogPaths, PlatformRequest, SavedTargets
from sidekick.targets import TargetResolver

FAKE_BUILD_TOOL = (
    "import sys\n"
    "args = sys.argv[1:]\n"
    "print('Build settings from command line:')\n"
    "print('    DESTINATION = ' + args[args.index('-destination') + 1])\n"
    "sys.stdout.flush()\n"
    "if '--fail' in args:\n"
    "    print('/src/App.swift:4:2: error: expected expression', file=sys.stderr)\n"
    "    sys.exit(65)\n"
    "print('** BUILD SUCCEEDED **')\n"
)

UPPERCASING_FORMATTER = (
    "import sys\n"
    "for line in sys.stdin:\n"
    "    sys.stdout.write(line.upper())\n"
)


@pytest.mark.integration
class TestBuildFlow:
    """Integration tests from target resolution to persisted logs."""

    def setup_method(self):
        self.resolver = TargetResolver(probe=Mock(return_value=False), simulators=Mock(return_value=[]))
        self.saved = SavedTargets(device_id="D1", device_name="Phone-X",
                                  simulator_id="S1", simulator_name="SIM1")

    def test_successful_build_on_fallback_simulator(self, python_script, executable_script):
        destination = self.resolver.resolve(PlatformRequest.DEVICE, self.saved)
        tool = python_script(FAKE_BUILD_TOOL, name="xcodebuild.py")
        formatter = executable_script(UPPERCASING_FORMATTER, name="formatter")
        pipeline = StreamingPipeline(formatter_path=formatter, stdout=io.StringIO(), stderr=io.StringIO())

        result = pipeline.run(sys.executable, [*tool, *destination.destination_args(), "build"])

        assert result.exit_code == 0
        assert "DESTINATION = platform=iOS Simulator,id=S1" in result.raw_log
        assert "DESTINATION = PLATFORM=IOS SIMULATOR,ID=S1" in result.pretty_log
        assert result.errors == []

    def test_failed_build_logs_are_persisted(self, python_script, executable_script, temp_dir):
        destination = self.resolver.resolve(PlatformRequest.SIMULATOR, self.saved)
        tool = python_script(FAKE_BUILD_TOOL, name="xcodebuild.py")
        formatter = executable_script(UPPERCASING_FORMATTER, name="formatter")
        pipeline = StreamingPipeline(formatter_path=formatter, stdout=io.StringIO(), stderr=io.StringIO())
        log_paths = LogPaths(raw_log=temp_dir / "build.log", pretty_log=temp_dir / "build-pretty.log")

        result = pipeline.run(sys.executable, [*tool, *destination.destination_args(), "--fail"])
        errors = write_logs(result, log_paths)
        report = format_failure_report("Build", errors, log_paths)

        assert result.exit_code == 65
        assert errors == ["error: EXPECTED EXPRESSION"]
        assert "error: expected expression" in log_paths.raw_log.read_text()
        assert "ERROR: EXPECTED EXPRESSION" in log_paths.pretty_log.read_text()
        assert "  error: EXPECTED EXPRESSION" in report
