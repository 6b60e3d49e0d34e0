"""
Loading spinner for blocking operations.
"""

import sys
import threading
from typing import Callable, IO, Optional, TypeVar

T = TypeVar("T")

FRAMES = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]
FRAME_INTERVAL = 0.1


class LoadingSpinner:
    """
    Animates a one-line spinner on a background thread.
    """

    def __init__(self, message: str, stream: Optional[IO] = None,
                 interval: float = FRAME_INTERVAL):
        self.message = message
        self.stream = stream
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._frame = 0

    @property
    def running(self) -> bool:
        return self._thread is not None

    def _write(self, text: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(text)
        stream.flush()

    def _next_frame(self) -> str:
        frame = FRAMES[self._frame]
        self._frame = (self._frame + 1) % len(FRAMES)
        return frame

    def _spin(self) -> None:
        while not self._stop.wait(self.interval):
            self._write(f"\r{self._next_frame()} {self.message}")

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._write(f"{self._next_frame()} {self.message}")
        self._thread = threading.Thread(target=self._spin, name="spinner", daemon=True)
        self._thread.start()

    def stop(self, success: bool = True, message: Optional[str] = None) -> None:
        if not self.running:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None
        self._write("\r\x1b[K")
        if message is not None:
            self._write(f"{message}\n")
        elif not success:
            self._write(f"❌ {self.message}\n")


def with_spinner(message: str, operation: Callable[[], T], stream: Optional[IO] = None) -> T:
    """Run ``operation`` while a spinner is shown; a raised error marks it failed."""
    spinner = LoadingSpinner(message, stream=stream)
    spinner.start()
    try:
        result = operation()
    except BaseException:
        spinner.stop(success=False)
        raise
    spinner.stop()
    return result
