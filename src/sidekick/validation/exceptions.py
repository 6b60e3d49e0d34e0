"""
Exception types and error handling helpers.

This module defines one exception class per failure kind the engine can
report, each carrying only the fields relevant to that kind, plus the
logging helpers used where errors are handled.
"""

import logging
from enum import Enum
from typing import Any, List, Optional, Union

logger = logging.getLogger(__name__)

NO_TARGET_MESSAGE = (
    "No device or simulator available. Run 'sidekick configure --init' to configure."
)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class SidekickError(Exception):
    """Base class for every error raised by the engine."""


class SpawnFailure(SidekickError):
    """
    The executable could not be started at all.

    Distinct from a process that started and exited non-zero; no logs exist.
    """

    def __init__(self, executable: str, cause: BaseException):
        super().__init__(f"Failed to start process '{executable}': {cause}")
        self.executable = executable
        self.cause = cause


class NonZeroExit(SidekickError):
    """
    A tool ran and reported failure.

    Carries everything captured before the failure so callers can still
    persist the logs.
    """

    def __init__(self, exit_code: int, raw_log: str = "", pretty_log: Optional[str] = None,
                 errors: Optional[List[str]] = None, stdout: str = "", stderr: str = ""):
        super().__init__(f"Process exited with code {exit_code}")
        self.exit_code = exit_code
        self.raw_log = raw_log
        self.pretty_log = pretty_log
        self.errors = list(errors or [])
        self.stdout = stdout
        self.stderr = stderr

    @property
    def result(self) -> "RunResult":
        from ..models.process import RunResult

        return RunResult(
            exit_code=self.exit_code,
            stdout=self.stdout,
            stderr=self.stderr,
            raw_log=self.raw_log,
            pretty_log=self.pretty_log,
            errors=list(self.errors),
        )


class NoTargetAvailable(SidekickError):
    """Every destination fallback was exhausted."""

    def __init__(self, platform: Any = None):
        super().__init__(NO_TARGET_MESSAGE)
        self.platform = platform


class ProbeFailure(SidekickError):
    """A connectivity probe could not confirm the device. Never leaves the probe."""

    def __init__(self, device_id: str, reason: str):
        super().__init__(f"Probe for device {device_id} failed: {reason}")
        self.device_id = device_id
        self.reason = reason


class ProbeTimeout(ProbeFailure):
    def __init__(self, device_id: str, timeout: float):
        super().__init__(device_id, f"timed out after {timeout}s")
        self.timeout = timeout


class TerminalUnavailable(SidekickError):
    """The controlling terminal cannot be switched to raw mode."""

    def __init__(self, reason: str):
        super().__init__(f"Terminal unavailable: {reason}")
        self.reason = reason


class ToolingError(SidekickError):
    """An inventory tool failed or printed output that could not be decoded."""

    def __init__(self, tool: str, message: str, exit_code: Optional[int] = None, stderr: str = ""):
        cleaned = stderr.strip()
        if exit_code is not None:
            text = f"{tool} failed (exit {exit_code})" + (f": {cleaned}" if cleaned else "")
        else:
            text = f"{tool} returned unexpected output: {message}"
        super().__init__(text)
        self.tool = tool
        self.exit_code = exit_code
        self.stderr = stderr


class ValidationError(SidekickError):
    """
    Exception raised when configuration validation fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)
