"""
Pre/post command hooks and the one-time setup job.

Hook commands run with live output. A command containing a path separator
is executed directly; a bare name is resolved through ``/usr/bin/env``.
"""

import logging
from typing import List, Optional, Tuple

from ..models.config import CommandHooks, HookSpec
from ..system.commands import ProcessRunner, get_process_runner
from ..validation import ErrorSeverity, SpawnFailure, handle_subprocess_error

logger = logging.getLogger(__name__)

ENV_EXECUTABLE = "/usr/bin/env"


def resolve_hook_executable(command: str, args: List[str]) -> Tuple[str, List[str]]:
    if "/" in command:
        return command, list(args)
    return ENV_EXECUTABLE, [command, *args]


def run_hook(spec: Optional[HookSpec], label: str,
             runner: Optional[ProcessRunner] = None) -> bool:
    """
    Run one hook if configured.

    Returns:
        True if a command ran

    Raises:
        NonZeroExit: If the hook command failed
        SpawnFailure: If the hook command could not be started
    """
    if spec is None:
        return False
    command = spec.command.strip()
    if not command:
        logger.warning(f"{label} hook has an empty command; skipping.")
        return False

    executable, arguments = resolve_hook_executable(command, spec.args)
    logger.info(f"Running {label} hook: {' '.join([command, *spec.args])}")
    try:
        result = (runner or get_process_runner()).run_streaming(executable, arguments)
    except SpawnFailure as e:
        handle_subprocess_error(e, f"{label} hook", severity=ErrorSeverity.ERROR,
                                reraise=True, logger=logger)
        raise
    if result.exit_code != 0:
        logger.error(f"{label} hook failed with exit code {result.exit_code}")
    result.raise_for_status()
    return True


def run_command_hooks(hooks: Optional[CommandHooks], command: str, phase: str,
                      runner: Optional[ProcessRunner] = None) -> bool:
    """Run the ``pre`` or ``post`` hook of a command such as "build" or "run"."""
    if phase not in ("pre", "post"):
        raise ValueError(f"Unknown hook phase '{phase}'")
    spec = getattr(hooks, phase) if hooks else None
    return run_hook(spec, f"{phase}-{command}", runner)


def run_setup_job(job: Optional[CommandHooks], completed: bool,
                  runner: Optional[ProcessRunner] = None) -> bool:
    """
    Run the setup job's pre and post commands unless it already completed.

    Returns:
        True if the job ran; the caller records completion
    """
    if completed or job is None:
        return False
    run_hook(job.pre, "setup-job-pre", runner)
    run_hook(job.post, "setup-job-post", runner)
    return True
