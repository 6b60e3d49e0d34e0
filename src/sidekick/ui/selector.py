"""
Interactive list selection.

Draws a menu, lets the user move with the arrow keys or jump with digits,
and returns the chosen option. Every redraw erases exactly the lines drawn
before, so the menu never grows the scrollback.

Keys:
    up/down     move, wrapping (through the skip row when skipping is allowed)
    1-9         jump to that option
    0           jump to the skip row (when allowed)
    Enter       commit the highlighted row
    Esc         skip when allowed, otherwise the first option
"""

import logging
from dataclasses import dataclass
from typing import Callable, IO, List, Optional, Sequence

from ..validation import TerminalUnavailable
from .terminal import Key, TerminalController

logger = logging.getLogger(__name__)

SKIP_INDEX = -1

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
BRIGHT_CYAN = "\x1b[96m"


@dataclass
class SelectionMenu:
    """
    Menu state. ``selected`` is an option index, or SKIP_INDEX for the skip row.
    """

    prompt: str
    options: List[str]
    allow_skip: bool = False
    selected: int = 0

    @property
    def on_skip(self) -> bool:
        return self.allow_skip and self.selected == SKIP_INDEX

    @property
    def last_index(self) -> int:
        return len(self.options) - 1

    def move_up(self) -> None:
        if self.on_skip:
            self.selected = self.last_index
        elif self.selected == 0:
            self.selected = SKIP_INDEX if self.allow_skip else self.last_index
        else:
            self.selected -= 1

    def move_down(self) -> None:
        if self.on_skip:
            self.selected = 0
        elif self.selected == self.last_index:
            self.selected = SKIP_INDEX if self.allow_skip else 0
        else:
            self.selected += 1

    def jump(self, digit: int) -> bool:
        """Handle a digit key. Returns True if the highlight moved."""
        if digit == 0:
            if self.allow_skip:
                self.selected = SKIP_INDEX
                return True
            return False
        if 1 <= digit <= len(self.options):
            self.selected = digit - 1
            return True
        return False

    def committed_value(self) -> Optional[str]:
        return None if self.on_skip else self.options[self.selected]

    def cancelled_value(self) -> Optional[str]:
        return None if self.allow_skip else self.options[0]

    def render_lines(self) -> List[str]:
        hint = "(Use ↑/↓ to navigate, Enter to select" + (", Esc to skip)" if self.allow_skip else ")")
        lines = [f"{self.prompt}:", hint, ""]
        if self.allow_skip:
            lines.append(self._row("[Skip]", self.on_skip))
        for index, option in enumerate(self.options):
            lines.append(self._row(f"[{index + 1}] {option}", index == self.selected))
        return lines

    @staticmethod
    def _row(label: str, highlighted: bool) -> str:
        if highlighted:
            return f"{BRIGHT_CYAN}{BOLD}→ {label}{RESET}"
        return f"  {label}"


class InteractiveSelector:
    """
    Runs a SelectionMenu against a terminal.

    Args:
        terminal_factory: Builds the TerminalController (replaced in tests)
        output: Stream the menu is drawn on
    """

    def __init__(self, terminal_factory: Optional[Callable[[], TerminalController]] = None,
                 output: Optional[IO] = None):
        self.output = output
        self.terminal_factory = terminal_factory or (lambda: TerminalController(output=self.output))

    def select(self, prompt: str, options: Sequence[str], allow_skip: bool = False,
               non_interactive: bool = False) -> Optional[str]:
        """
        Returns:
            The chosen option, or None when skipped (or when there are no options)
        """
        options = list(options)
        if len(options) < 2:
            return options[0] if options else None
        if non_interactive:
            return options[0]

        menu = SelectionMenu(prompt=prompt, options=options, allow_skip=allow_skip)
        terminal = self.terminal_factory()
        try:
            with terminal:
                return self._interact(menu, terminal)
        except TerminalUnavailable as e:
            logger.warning(f"{e}; using '{options[0]}' for '{prompt}'")
            return options[0]

    def _interact(self, menu: SelectionMenu, terminal: TerminalController) -> Optional[str]:
        drawn = self._draw(menu, terminal, previous=0)
        while True:
            try:
                event = terminal.read_key()
            except EOFError:
                return self._finish(menu, terminal, drawn, menu.cancelled_value())
            if event is None:
                continue

            key, digit = event
            if key is Key.UP:
                menu.move_up()
            elif key is Key.DOWN:
                menu.move_down()
            elif key is Key.DIGIT:
                if not menu.jump(digit):
                    continue
            elif key is Key.ENTER:
                return self._finish(menu, terminal, drawn, menu.committed_value())
            elif key is Key.ESCAPE:
                return self._finish(menu, terminal, drawn, menu.cancelled_value())
            drawn = self._draw(menu, terminal, previous=drawn)

    @staticmethod
    def _draw(menu: SelectionMenu, terminal: TerminalController, previous: int) -> int:
        terminal.clear_lines(previous)
        lines = menu.render_lines()
        terminal.write("".join(f"{line}\n" for line in lines))
        return len(lines)

    @staticmethod
    def _finish(menu: SelectionMenu, terminal: TerminalController, drawn: int,
                value: Optional[str]) -> Optional[str]:
        terminal.clear_lines(drawn)
        terminal.write(f"{menu.prompt}: {value if value is not None else 'Skipped'}\n\n")
        return value


def select(prompt: str, options: Sequence[str], allow_skip: bool = False,
           non_interactive: bool = False) -> Optional[str]:
    """Ask the user to pick one of ``options`` on the controlling terminal."""
    return InteractiveSelector().select(prompt, options, allow_skip, non_interactive)
