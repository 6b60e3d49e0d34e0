"""
Data models and structures for the build/test engine.

Configuration Models:
- Engine settings loaded from TOML
- Pre/post command hooks

Process Models:
- Process invocations and their single, final result
- Caller-chosen log destinations

Destination Models:
- Platform requests, saved targets and resolved destinations
- Device inventory listings

All models are dataclasses with type hints.
"""

# Configuration models
from .config import CommandHooks, EngineConfig, HookSpec

# Process models
from .process import LogPaths, ProcessInvocation, RunResult

# Destination models
from .destination import (
    Destination,
    DestinationKind,
    PlatformRequest,
    SavedTargets,
    generic_destination_args,
)

# Inventory models
from .inventory import PhysicalDevice, SimulatorDevice, SimulatorRuntimeGroup

__all__ = [
    # Configuration
    "CommandHooks",
    "EngineConfig",
    "HookSpec",
    # Process
    "LogPaths",
    "ProcessInvocation",
    "RunResult",
    # Destination
    "Destination",
    "DestinationKind",
    "PlatformRequest",
    "SavedTargets",
    "generic_destination_args",
    # Inventory
    "PhysicalDevice",
    "SimulatorDevice",
    "SimulatorRuntimeGroup",
]
