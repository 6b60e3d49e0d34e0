"""
System interaction utilities.

This module provides the process-level building blocks of the engine:

- Process execution with per-stream reader threads and optional live mirroring
- Process tree termination for bounded helper commands
- Termination signal routing to a single owner
- Ephemeral file tracking with exit and signal cleanup
"""

# Command execution
from .commands import (
    ProcessRunner,
    get_process_runner,
    run_process,
    run_process_streaming,
    spawn,
)

# Process termination
from .processes import terminate_process_tree

# Signals and scratch files
from .signal_handler import SignalHandler, exit_status_for_signal
from .streams import PipeForwarder, SharedLog, StreamReader, decode_output, terminal_sink
from .temp_files import TempResourceTracker

__all__ = [
    "ProcessRunner",
    "get_process_runner",
    "run_process",
    "run_process_streaming",
    "spawn",
    "terminate_process_tree",
    "SignalHandler",
    "exit_status_for_signal",
    "PipeForwarder",
    "SharedLog",
    "StreamReader",
    "decode_output",
    "terminal_sink",
    "TempResourceTracker",
]
