"""
Unit tests for build error extraction.
"""

import pytest

from sidekick.executor import extract_errors


@pytest.mark.unit
class TestExtractErrors:
    """Test cases for extract_errors()."""

    def test_collects_error_lines_in_order(self):
        output = (
            "Compiling A.swift\n"
            "/src/A.swift:3:5: error: cannot find 'foo' in scope\n"
            "/src/B.swift:9:1: warning: unused variable\n"
            "/src/C.swift:1:1: error: missing return\n"
        )

        assert extract_errors(output) == [
            "error: cannot find 'foo' in scope",
            "error: missing return",
        ]

    def test_duplicates_are_dropped(self):
        output = "a: error: boom\nb: error: boom\nerror: other\n"

        assert extract_errors(output) == ["error: boom", "error: other"]

    def test_doubled_prefix_is_collapsed(self):
        """A message that itself starts with "error:" is reported once."""
        assert extract_errors("error: error: linker failed") == ["error: linker failed"]

    def test_match_is_case_insensitive(self):
        assert extract_errors("ERROR: Build input file cannot be found") == [
            "error: Build input file cannot be found",
        ]

    def test_no_errors(self):
        assert extract_errors("** BUILD SUCCEEDED **\n") == []
        assert extract_errors("") == []
