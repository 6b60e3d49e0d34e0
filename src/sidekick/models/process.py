"""
Process execution data models.

This module contains the data structures passed into and returned from the
process runner and the streaming build pipeline.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class ProcessInvocation:
    """
    A single request to run an external executable.

    Created per call and never reused.
    """

    # Absolute path (or PATH-resolvable name) of the executable to spawn.
    executable: str
    # Ordered argument list, passed through untouched.
    args: Sequence[str] = ()
    # Optional payload written to the child's stdin before waiting.
    stdin: Optional[bytes] = None

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.args]

    def describe(self) -> str:
        return " ".join(self.argv)


@dataclass
class RunResult:
    """
    The outcome of exactly one process or pipeline invocation.
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    # Untouched stdout and stderr chunks in the order they were read.
    # Ordering is exact within a stream, best-effort across the two.
    raw_log: Optional[str] = None
    # Formatter output. None means no formatter ran, never "ran and printed nothing".
    pretty_log: Optional[str] = None
    # De-duplicated "error:" lines in order of first appearance.
    errors: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def combined_output(self) -> str:
        return self.stdout + self.stderr

    def raise_for_status(self) -> "RunResult":
        """Raise NonZeroExit carrying everything captured if the process failed."""
        if self.exit_code != 0:
            from ..validation import NonZeroExit

            raise NonZeroExit(
                exit_code=self.exit_code,
                raw_log=self.raw_log if self.raw_log is not None else self.combined_output,
                pretty_log=self.pretty_log,
                errors=self.errors,
                stdout=self.stdout,
                stderr=self.stderr,
            )
        return self


@dataclass(frozen=True)
class LogPaths:
    """Caller-chosen destinations for persisted build logs."""

    raw_log: Path
    pretty_log: Path
