"""
Unit tests for the interactive selector.

A scripted terminal replays key events so menu navigation, rendering and
terminal handling can be checked without a TTY.
"""

from unittest.mock import Mock

import pytest

from sidekick.ui import InteractiveSelector, Key, SelectionMenu, SKIP_INDEX
from sidekick.validation import TerminalUnavailable

UP = (Key.UP, None)
DOWN = (Key.DOWN, None)
ENTER = (Key.ENTER, None)
ESCAPE = (Key.ESCAPE, None)


def digit(n):
    return Key.DIGIT, n


class ScriptedTerminal:
    """Terminal stand-in that replays key events and records drawing."""

    def __init__(self, keys, unavailable=False):
        self.keys = list(keys)
        self.unavailable = unavailable
        self.writes = []
        self.cleared = []
        self.entered = False
        self.restored = False

    def __enter__(self):
        if self.unavailable:
            raise TerminalUnavailable("stdin is not a terminal")
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.restored = True

    def read_key(self):
        if not self.keys:
            raise EOFError("no more keys")
        return self.keys.pop(0)

    def write(self, text):
        self.writes.append(text)

    def clear_lines(self, count):
        self.cleared.append(count)

    @property
    def output(self):
        return "".join(self.writes)


def run_selector(keys, options=("A", "B", "C"), allow_skip=False, prompt="Pick"):
    terminal = ScriptedTerminal(keys)
    selector = InteractiveSelector(terminal_factory=lambda: terminal)
    return selector.select(prompt, list(options), allow_skip=allow_skip), terminal


@pytest.mark.unit
class TestInteractiveSelector:
    """Test cases for InteractiveSelector.select()."""

    def test_arrow_down_twice_then_enter(self):
        value, terminal = run_selector([DOWN, DOWN, ENTER], allow_skip=True)

        assert value == "C"
        assert terminal.entered and terminal.restored

    def test_enter_immediately_returns_first_option(self):
        value, _ = run_selector([ENTER], allow_skip=True)

        assert value == "A"

    def test_down_from_last_reaches_skip_when_allowed(self):
        value, _ = run_selector([DOWN, DOWN, DOWN, ENTER], allow_skip=True)

        assert value is None

    def test_down_from_last_wraps_to_first_without_skip(self):
        value, _ = run_selector([DOWN, DOWN, DOWN, ENTER])

        assert value == "A"

    def test_up_from_first_goes_through_skip_to_last(self):
        value, _ = run_selector([UP, UP, ENTER], allow_skip=True)

        assert value == "C"

    def test_up_from_first_wraps_to_last_without_skip(self):
        value, _ = run_selector([UP, ENTER])

        assert value == "C"

    def test_escape_skips_when_allowed(self):
        value, terminal = run_selector([DOWN, ESCAPE], allow_skip=True)

        assert value is None
        assert terminal.output.endswith("Pick: Skipped\n\n")

    def test_escape_without_skip_returns_first_option(self):
        value, _ = run_selector([DOWN, ESCAPE])

        assert value == "A"

    def test_digit_jumps_to_option(self):
        value, _ = run_selector([digit(2), ENTER])

        assert value == "B"

    def test_out_of_range_digit_is_ignored(self):
        value, _ = run_selector([digit(9), ENTER])

        assert value == "A"

    def test_zero_jumps_to_skip(self):
        allowed, _ = run_selector([digit(0), ENTER], allow_skip=True)
        not_allowed, _ = run_selector([digit(0), ENTER])

        assert allowed is None
        assert not_allowed == "A"

    def test_unknown_bytes_are_ignored(self):
        value, _ = run_selector([None, DOWN, None, ENTER])

        assert value == "B"

    def test_closed_input_cancels(self):
        value, terminal = run_selector([DOWN])

        assert value == "A"
        assert terminal.restored

    def test_redraw_clears_exactly_what_was_drawn(self):
        _, terminal = run_selector([DOWN, DOWN, ENTER], allow_skip=True)

        # prompt, hint, blank line, skip row and three options
        assert terminal.cleared == [0, 7, 7, 7]
        assert terminal.output.endswith("Pick: C\n\n")

    def test_single_option_is_returned_without_a_terminal(self):
        factory = Mock()
        selector = InteractiveSelector(terminal_factory=factory)

        assert selector.select("Pick", ["only"]) == "only"
        assert selector.select("Pick", []) is None
        factory.assert_not_called()

    def test_non_interactive_returns_first_option(self):
        factory = Mock()
        selector = InteractiveSelector(terminal_factory=factory)

        assert selector.select("Pick", ["A", "B"], non_interactive=True) == "A"
        factory.assert_not_called()

    def test_unavailable_terminal_returns_first_option(self):
        terminal = ScriptedTerminal([], unavailable=True)
        selector = InteractiveSelector(terminal_factory=lambda: terminal)

        assert selector.select("Pick", ["A", "B"], allow_skip=True) == "A"


@pytest.mark.unit
class TestSelectionMenu:
    """Test cases for SelectionMenu state and rendering."""

    def test_render_with_skip(self):
        menu = SelectionMenu(prompt="Device", options=["Phone-X", "Pad"], allow_skip=True)

        lines = menu.render_lines()

        assert lines[0] == "Device:"
        assert lines[1] == "(Use ↑/↓ to navigate, Enter to select, Esc to skip)"
        assert lines[2] == ""
        assert lines[3] == "  [Skip]"
        assert lines[4] == "\x1b[96m\x1b[1m→ [1] Phone-X\x1b[0m"
        assert lines[5] == "  [2] Pad"

    def test_render_without_skip(self):
        menu = SelectionMenu(prompt="Scheme", options=["App", "Tests"])

        lines = menu.render_lines()

        assert lines[1] == "(Use ↑/↓ to navigate, Enter to select)"
        assert len(lines) == 5

    def test_skip_highlight(self):
        menu = SelectionMenu(prompt="Device", options=["A", "B"], allow_skip=True)
        menu.move_up()

        assert menu.selected == SKIP_INDEX
        assert menu.render_lines()[3] == "\x1b[96m\x1b[1m→ [Skip]\x1b[0m"
        assert menu.committed_value() is None
