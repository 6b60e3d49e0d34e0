"""
Build and test execution.

- Formatter discovery (fixed paths, toolchain locator, PATH)
- The streaming pipeline connecting the build tool to the formatter
- Diagnostic extraction and failure log persistence
- Pre/post command hooks
"""

from .diagnostics import extract_errors
from .formatter import FormatterLocator, resolve_formatter_path
from .hooks import resolve_hook_executable, run_command_hooks, run_hook, run_setup_job
from .pipeline import StreamingPipeline, run_pipeline
from .reporting import format_failure_report, write_logs

__all__ = [
    "extract_errors",
    "FormatterLocator",
    "resolve_formatter_path",
    "resolve_hook_executable",
    "run_command_hooks",
    "run_hook",
    "run_setup_job",
    "StreamingPipeline",
    "run_pipeline",
    "format_failure_report",
    "write_logs",
]
