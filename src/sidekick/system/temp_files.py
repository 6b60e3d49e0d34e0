"""
Ephemeral file tracking with best-effort cleanup.

One TempResourceTracker is constructed at process start and passed to every
component that needs scratch files. Tracked paths are removed on explicit
request, on normal interpreter exit, and when SIGINT/SIGTERM is delivered
(after which the process exits with 130/143).
"""

import atexit
import logging
import os
import sys
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Callable, Optional, Set, Union

from .signal_handler import SignalHandler, exit_status_for_signal

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TempResourceTracker:
    """
    Registry of scratch file paths owned by this process.

    The tracked set is the only state shared between normal execution and
    the signal handler. It is guarded by a re-entrant lock because a handler
    may interrupt the main thread while it holds the lock.

    Args:
        directory: Where to place files (defaults to the system temp dir)
        install_hooks: Register the exit and signal cleanup on first create()
        exit_func: Called with the exit status after a signal-triggered sweep
    """

    def __init__(self, directory: Optional[PathLike] = None, install_hooks: bool = True,
                 exit_func: Callable[[int], None] = sys.exit):
        self.directory = Path(directory) if directory is not None else Path(tempfile.gettempdir())
        self.install_hooks = install_hooks
        self.exit_func = exit_func
        self._tracked: Set[str] = set()
        self._lock = threading.RLock()
        self._hooks_installed = False
        self._signal_handler = SignalHandler(self._on_signal)

    @property
    def tracked(self) -> Set[str]:
        with self._lock:
            return set(self._tracked)

    def create(self, prefix: str, extension: str) -> Path:
        """
        Reserve a unique scratch path and start tracking it.

        The file itself is not created; whoever writes it leaves removal to
        this tracker.
        """
        self.install()
        suffix = extension.lstrip(".")
        filename = f"{prefix}-{uuid.uuid4().hex.upper()}" + (f".{suffix}" if suffix else "")
        path = self.directory / filename
        with self._lock:
            self._tracked.add(str(path))
        logger.debug(f"Tracking temp file {path}")
        return path

    def remove(self, path: PathLike) -> None:
        """Stop tracking a path and delete it. Safe to call repeatedly."""
        key = str(path)
        with self._lock:
            self._tracked.discard(key)
        self._unlink(key)

    def cleanup_all(self) -> None:
        """Remove every tracked path; individual failures are logged and skipped."""
        with self._lock:
            paths = list(self._tracked)
            self._tracked.clear()
        for path in paths:
            self._unlink(path)
        if paths:
            logger.debug(f"Cleaned up {len(paths)} temp files")

    def install(self) -> None:
        """Register exit and signal cleanup once."""
        with self._lock:
            if self._hooks_installed or not self.install_hooks:
                return
            self._hooks_installed = True
        atexit.register(self.cleanup_all)
        if threading.current_thread() is threading.main_thread():
            self._signal_handler.setup_signal_handlers()
        else:
            logger.debug("Not on the main thread; temp files are cleaned at exit only")

    def uninstall(self) -> None:
        """Undo install(): unregister the exit hook and restore signal handlers."""
        with self._lock:
            if not self._hooks_installed:
                return
            self._hooks_installed = False
        atexit.unregister(self.cleanup_all)
        self._signal_handler.cleanup_signal_handlers()

    def _on_signal(self, signum: int) -> None:
        self.cleanup_all()
        self.exit_func(exit_status_for_signal(signum))

    @staticmethod
    def _unlink(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove temp file {path}: {e}")

    def __enter__(self) -> "TempResourceTracker":
        self.install()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup_all()
        self.uninstall()
