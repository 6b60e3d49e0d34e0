"""
Process tree termination.

Used when a bounded wait on a helper process (such as the connectivity
probe) expires. Build and formatter processes are never killed here.
"""

import logging
from typing import List

import psutil

logger = logging.getLogger(__name__)

GRACEFUL_TIMEOUT = 1.0
FORCE_TIMEOUT = 1.0


def _is_process_alive(process: psutil.Process) -> bool:
    """Safely check if a process is still alive and not a zombie."""
    try:
        if not process.is_running():
            return False
        return process.status() not in (psutil.STATUS_ZOMBIE, psutil.STATUS_DEAD)
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return False


def _collect_tree(parent: psutil.Process) -> List[psutil.Process]:
    processes = [parent]
    try:
        processes.extend(parent.children(recursive=True))
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        pass
    return [p for p in processes if _is_process_alive(p)]


def terminate_process_tree(pid: int, name: str,
                           graceful_timeout: float = GRACEFUL_TIMEOUT,
                           force_timeout: float = FORCE_TIMEOUT) -> List[int]:
    """
    Terminate a process and its children: SIGTERM first, SIGKILL for survivors.

    Args:
        pid: Root process id
        name: Human-readable name for log messages
        graceful_timeout: Seconds to wait after SIGTERM
        force_timeout: Seconds to wait after SIGKILL

    Returns:
        PIDs still alive after both phases (normally empty)
    """
    if pid <= 0:
        logger.warning(f"Invalid PID {pid} for {name}, skipping termination")
        return []

    try:
        parent = psutil.Process(pid)
    except psutil.NoSuchProcess:
        logger.debug(f"Process {name} (PID: {pid}) already terminated")
        return []

    processes = _collect_tree(parent)
    logger.debug(f"Terminating {name} (PID: {pid}) and {max(len(processes) - 1, 0)} children")

    for phase, timeout in (("terminate", graceful_timeout), ("kill", force_timeout)):
        for process in processes:
            try:
                getattr(process, phase)()
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied:
                logger.warning(f"Access denied sending {phase} to PID {process.pid}")
        _, alive = psutil.wait_procs(processes, timeout=timeout)
        processes = [p for p in alive if _is_process_alive(p)]
        if not processes:
            break

    if processes:
        logger.error(f"Failed to terminate {len(processes)} processes for {name}")
    return [p.pid for p in processes]
