"""
Sidekick: process execution and target selection engine for a local
developer CLI.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Input validation and error handling
- system: Process running, stream capture, signals and temp files
- executor: Build pipeline with optional output formatter, hooks, reporting
- targets: Device inventory, connectivity probe and target resolution
- ui: Interactive selector and loading spinner

Usage:
    from sidekick import run_pipeline, resolve_target, select
    result = run_pipeline("/usr/bin/xcodebuild", ["-scheme", "App", "build"])
    result.raise_for_status()
"""

# Main interfaces
from .config import clear_config_cache, get_config, set_config_path
from .executor import StreamingPipeline, run_pipeline
from .logging_setup import setup_logging
from .system import ProcessRunner, TempResourceTracker, run_process, run_process_streaming
from .targets import ConnectivityProbe, TargetResolver, resolve_target
from .ui import InteractiveSelector, select

# Model classes for external use
from .models import (
    Destination,
    DestinationKind,
    EngineConfig,
    LogPaths,
    PlatformRequest,
    ProcessInvocation,
    RunResult,
    SavedTargets,
)

# Error types
from .validation import (
    NoTargetAvailable,
    NonZeroExit,
    ProbeFailure,
    ProbeTimeout,
    SidekickError,
    SpawnFailure,
    TerminalUnavailable,
    ToolingError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    # Main interfaces
    "clear_config_cache",
    "get_config",
    "set_config_path",
    "StreamingPipeline",
    "run_pipeline",
    "setup_logging",
    "ProcessRunner",
    "TempResourceTracker",
    "run_process",
    "run_process_streaming",
    "ConnectivityProbe",
    "TargetResolver",
    "resolve_target",
    "InteractiveSelector",
    "select",
    # Models
    "Destination",
    "DestinationKind",
    "EngineConfig",
    "LogPaths",
    "PlatformRequest",
    "ProcessInvocation",
    "RunResult",
    "SavedTargets",
    # Errors
    "NoTargetAvailable",
    "NonZeroExit",
    "ProbeFailure",
    "ProbeTimeout",
    "SidekickError",
    "SpawnFailure",
    "TerminalUnavailable",
    "ToolingError",
    "ValidationError",
]
