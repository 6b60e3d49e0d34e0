"""
Error taxonomy and validation for the sidekick package.

This module provides the engine's exception hierarchy, consistent error
logging helpers, and the validators used for configuration values.
"""

# Exception classes and error handling
from .exceptions import (
    ErrorSeverity,
    NO_TARGET_MESSAGE,
    NoTargetAvailable,
    NonZeroExit,
    ProbeFailure,
    ProbeTimeout,
    SidekickError,
    SpawnFailure,
    TerminalUnavailable,
    ToolingError,
    ValidationError,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

# Validation functions
from .validators import (
    validate_bool,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_simple_command,
    validate_string_list,
)

__all__ = [
    # Errors
    "ErrorSeverity",
    "NO_TARGET_MESSAGE",
    "NoTargetAvailable",
    "NonZeroExit",
    "ProbeFailure",
    "ProbeTimeout",
    "SidekickError",
    "SpawnFailure",
    "TerminalUnavailable",
    "ToolingError",
    "ValidationError",
    "handle_config_error",
    "handle_error",
    "handle_subprocess_error",
    # Validators
    "validate_bool",
    "validate_enum_choice",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_simple_command",
    "validate_string_list",
]
