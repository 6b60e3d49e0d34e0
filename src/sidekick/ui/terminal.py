"""
Raw-mode terminal access for key-driven prompts.

TerminalController switches stdin to non-canonical, no-echo mode for the
duration of a ``with`` block and restores the saved mode on every exit path,
including SIGINT/SIGTERM delivered while the block runs.
"""

import logging
import os
import select
import signal
import sys
import termios
from enum import Enum
from typing import Any, Callable, IO, Optional, Tuple

from ..system.signal_handler import SignalHandler, exit_status_for_signal
from ..validation import TerminalUnavailable

logger = logging.getLogger(__name__)

ESC = 0x1B
ESCAPE_SEQUENCE_TIMEOUT = 0.05

CLEAR_LINE_UP = "\x1b[1A\x1b[2K"


class Key(Enum):
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESCAPE = "escape"
    DIGIT = "digit"


KeyEvent = Tuple[Key, Optional[int]]


def parse_key(read_byte: Callable[[Optional[float]], Optional[int]]) -> Optional[KeyEvent]:
    """
    Decode one key press from single-byte reads.

    ``read_byte(timeout)`` returns the next byte, or None when nothing arrives
    within ``timeout`` seconds (None timeout blocks). Returns None for bytes
    that mean nothing to a menu.
    """
    byte = read_byte(None)
    if byte is None:
        return None

    if byte == ESC:
        follower = read_byte(ESCAPE_SEQUENCE_TIMEOUT)
        if follower is None:
            return Key.ESCAPE, None
        if follower in (ord("["), ord("O")):
            final = read_byte(ESCAPE_SEQUENCE_TIMEOUT)
            if final == ord("A"):
                return Key.UP, None
            if final == ord("B"):
                return Key.DOWN, None
            return None
        return Key.ESCAPE, None

    if byte in (0x0D, 0x0A):
        return Key.ENTER, None

    if ord("0") <= byte <= ord("9"):
        return Key.DIGIT, byte - ord("0")

    return None


class TerminalController:
    """
    Scoped raw mode on a terminal file descriptor.

    Args:
        input_fd: Descriptor to read keys from (defaults to stdin)
        output: Text stream the menu is drawn on (defaults to stdout)

    Raises:
        TerminalUnavailable: On entry, if the descriptor is not a TTY or its
            mode cannot be changed
    """

    def __init__(self, input_fd: Optional[int] = None, output: Optional[IO] = None):
        self.input_fd = input_fd
        self.output = output
        self._saved_mode: Optional[list] = None
        self._signal_handler = SignalHandler(self._on_signal)

    @property
    def is_raw(self) -> bool:
        return self._saved_mode is not None

    def _fd(self) -> int:
        if self.input_fd is not None:
            return self.input_fd
        try:
            return sys.stdin.fileno()
        except (AttributeError, ValueError, OSError) as e:
            raise TerminalUnavailable(f"stdin has no file descriptor ({e})")

    def enable_raw_mode(self) -> None:
        fd = self._fd()
        if not os.isatty(fd):
            raise TerminalUnavailable("stdin is not a terminal")
        try:
            saved = termios.tcgetattr(fd)
            raw = termios.tcgetattr(fd)
            raw[3] &= ~(termios.ECHO | termios.ICANON)
            raw[6][termios.VMIN] = 1
            raw[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSANOW, raw)
        except termios.error as e:
            raise TerminalUnavailable(f"cannot enter raw mode ({e})")
        self.input_fd = fd
        self._saved_mode = saved
        self._signal_handler.setup_signal_handlers()
        logger.debug("Terminal switched to raw mode")

    def restore(self) -> None:
        """Put back the saved mode. Safe to call more than once."""
        saved, self._saved_mode = self._saved_mode, None
        if saved is None:
            return
        try:
            termios.tcsetattr(self.input_fd, termios.TCSANOW, saved)
            logger.debug("Terminal mode restored")
        except termios.error as e:
            logger.warning(f"Failed to restore terminal mode: {e}")
        finally:
            self._signal_handler.cleanup_signal_handlers()

    def _on_signal(self, signum: int) -> None:
        previous = self._signal_handler.previous_handler(signum)
        if previous is signal.SIG_IGN:
            return
        self.restore()
        if callable(previous):
            previous(signum, None)
        else:
            raise SystemExit(exit_status_for_signal(signum))

    def read_byte(self, timeout: Optional[float] = None) -> Optional[int]:
        """
        Next input byte, or None if ``timeout`` elapsed first.

        Raises:
            EOFError: If the input was closed
        """
        if timeout is not None:
            ready, _, _ = select.select([self.input_fd], [], [], timeout)
            if not ready:
                return None
        data = os.read(self.input_fd, 1)
        if not data:
            raise EOFError("terminal input closed")
        return data[0]

    def read_key(self) -> Optional[KeyEvent]:
        return parse_key(self.read_byte)

    def write(self, text: str) -> None:
        stream = self.output or sys.stdout
        stream.write(text)
        stream.flush()

    def clear_lines(self, count: int) -> None:
        """Move up and erase exactly ``count`` previously drawn lines."""
        if count > 0:
            self.write(CLEAR_LINE_UP * count)

    def __enter__(self) -> "TerminalController":
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.restore()
