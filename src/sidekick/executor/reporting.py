"""
Failure reporting for build and test runs.

Persists the raw and pretty logs at paths the caller chooses and renders the
short error summary shown after a failed run.
"""

import logging
from pathlib import Path
from typing import List, Union

from ..models.process import LogPaths, RunResult
from ..validation import NonZeroExit, handle_error, ErrorSeverity

logger = logging.getLogger(__name__)


def _write_text(path: Path, text: str) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return True
    except OSError as e:
        handle_error(e, f"writing log {path}", severity=ErrorSeverity.WARNING,
                     reraise=False, logger=logger)
        return False


def write_logs(result: Union[RunResult, NonZeroExit], log_paths: LogPaths) -> List[str]:
    """
    Write the raw log and the pretty log (or the raw log when no formatter
    ran) and return the run's diagnostics.
    """
    if isinstance(result, NonZeroExit):
        result = result.result
    raw = result.raw_log if result.raw_log is not None else result.combined_output
    _write_text(Path(log_paths.raw_log), raw)
    _write_text(Path(log_paths.pretty_log), result.pretty_log if result.pretty_log is not None else raw)
    return list(result.errors)


def format_failure_report(action_label: str, errors: List[str], log_paths: LogPaths) -> str:
    lines = [f"❌ {action_label} failed"]
    if errors:
        lines.append("")
        lines.append("Errors:")
        lines.extend(f"  {error}" for error in errors)
    lines.append("")
    lines.append(f"See full log: {log_paths.raw_log}")
    return "\n".join(lines)
