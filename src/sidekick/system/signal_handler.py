"""
Termination signal routing.

Python signal handlers cannot be bound to instances directly, so this class
installs one handler for SIGINT/SIGTERM that forwards the signal to a single
owner callback, and restores the previous handlers on cleanup.
"""

import logging
import signal
import threading
from typing import Any, Callable, Dict, Iterable

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def exit_status_for_signal(signum: int) -> int:
    """Conventional shell exit status for death by signal (130 for SIGINT, 143 for SIGTERM)."""
    return 128 + int(signum)


class SignalHandler:
    """
    Manages signal registration and restoration for one owner.

    Args:
        on_signal: Called with the signal number in the main thread
        signals: Signals to intercept
    """

    def __init__(self, on_signal: Callable[[int], None],
                 signals: Iterable[int] = DEFAULT_SIGNALS):
        self.on_signal = on_signal
        self.signals = tuple(signals)
        self._original_handlers: Dict[int, Any] = {}
        self._signal_handlers_set = False
        self._lock = threading.Lock()

    @property
    def installed(self) -> bool:
        return self._signal_handlers_set

    def setup_signal_handlers(self) -> bool:
        """
        Install the handlers. Only possible from the main thread.

        Returns:
            True if the handlers are in place
        """
        with self._lock:
            if self._signal_handlers_set:
                return True
            try:
                for signum in self.signals:
                    self._original_handlers[signum] = signal.signal(signum, self._handle)
                self._signal_handlers_set = True
                logger.debug("Signal handlers installed")
            except (ValueError, OSError) as e:
                logger.warning(f"Failed to set up signal handlers: {e}")
                self._restore_locked()
            return self._signal_handlers_set

    def previous_handler(self, signum: int) -> Any:
        """The handler that was active before setup_signal_handlers()."""
        return self._original_handlers.get(signum)

    def cleanup_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        with self._lock:
            self._restore_locked()

    def _restore_locked(self) -> None:
        try:
            for signum, handler in self._original_handlers.items():
                if handler is not None:
                    signal.signal(signum, handler)
            if self._original_handlers:
                logger.debug("Signal handlers restored")
        except (ValueError, OSError) as e:
            logger.warning(f"Failed to restore signal handlers: {e}")
        finally:
            self._original_handlers.clear()
            self._signal_handlers_set = False

    def _handle(self, signum: int, frame: Any) -> None:
        logger.warning(f"Signal {signal.strsignal(signum) or signum} received")
        self.on_signal(signum)
