"""
Output formatter discovery.

The formatter is optional. It is looked up in a fixed order: well-known
installation paths, then the toolchain locator (``xcrun --find``), then PATH.
The first hit wins; no hit means the build runs unformatted.
"""

import logging
import os
import shutil
from typing import Callable, List, Optional, Sequence

from ..models.config import DEFAULT_FORMATTER_CANDIDATES
from ..system.commands import ProcessRunner, get_process_runner
from ..validation import SpawnFailure

logger = logging.getLogger(__name__)


def _is_executable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


class FormatterLocator:
    """
    Resolves the formatter executable path.

    Args:
        name: Executable name, e.g. "xcpretty"
        candidates: Fixed paths checked first, in order
        locator: Toolchain locator executable, queried as ``<locator> --find <name>``
        runner: Process runner used for the locator query
        which: PATH lookup function
    """

    def __init__(self, name: str = "xcpretty",
                 candidates: Sequence[str] = DEFAULT_FORMATTER_CANDIDATES,
                 locator: Optional[str] = "/usr/bin/xcrun",
                 runner: Optional[ProcessRunner] = None,
                 which: Callable[[str], Optional[str]] = shutil.which):
        self.name = name
        self.candidates: List[str] = list(candidates)
        self.locator = locator
        self.runner = runner or get_process_runner()
        self.which = which

    def resolve(self) -> Optional[str]:
        for step in (self.from_common_locations, self.from_locator, self.from_path):
            path = step()
            if path:
                logger.debug(f"Formatter resolved via {step.__name__}: {path}")
                return path
        logger.debug(f"Formatter '{self.name}' not found; output will not be formatted")
        return None

    def from_common_locations(self) -> Optional[str]:
        return next((path for path in self.candidates if _is_executable_file(path)), None)

    def from_locator(self) -> Optional[str]:
        if not self.locator:
            return None
        try:
            result = self.runner.run(self.locator, ["--find", self.name])
        except SpawnFailure as e:
            logger.debug(f"Toolchain locator unavailable: {e}")
            return None
        if result.exit_code != 0:
            return None
        path = result.stdout.strip()
        if path and _is_executable_file(path):
            return path
        return None

    def from_path(self) -> Optional[str]:
        path = self.which(self.name)
        return path.strip() if path and path.strip() else None


def resolve_formatter_path(name: str = "xcpretty",
                           candidates: Sequence[str] = DEFAULT_FORMATTER_CANDIDATES,
                           locator: Optional[str] = "/usr/bin/xcrun") -> Optional[str]:
    return FormatterLocator(name, candidates, locator).resolve()
