"""
Configuration validation utilities.
"""

import logging
from typing import Any, Dict

from ..models.config import EngineConfig
from ..validation import (
    ValidationError,
    validate_bool,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_simple_command,
    validate_string_list,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_KNOWN_KEYS = {
    "log_level",
    "build_tool",
    "locator",
    "formatter_name",
    "formatter_candidates",
    "use_formatter",
    "probe_timeout_seconds",
    "target_family",
    "chunk_size",
}


def validate_engine_config(engine_data: Dict[str, Any]) -> EngineConfig:
    """
    Validate and create an EngineConfig from the raw `[engine]` table.

    Args:
        engine_data: Raw engine configuration from TOML

    Returns:
        Validated EngineConfig instance

    Raises:
        ValidationError: If validation fails
    """
    unknown = sorted(set(engine_data) - _KNOWN_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown [engine] keys: {', '.join(unknown)}")

    defaults = EngineConfig()
    try:
        log_level = validate_enum_choice(
            engine_data.get("log_level", defaults.log_level),
            valid_choices=LOG_LEVELS,
            field_name="engine.log_level",
            case_sensitive=False,
        )

        build_tool = validate_simple_command(
            engine_data.get("build_tool", defaults.build_tool),
            field_name="engine.build_tool",
        )

        locator = validate_simple_command(
            engine_data.get("locator", defaults.locator),
            field_name="engine.locator",
        )

        formatter_name = validate_simple_command(
            engine_data.get("formatter_name", defaults.formatter_name),
            field_name="engine.formatter_name",
        )

        formatter_candidates = validate_string_list(
            engine_data.get("formatter_candidates", defaults.formatter_candidates),
            field_name="engine.formatter_candidates",
        )

        use_formatter = validate_bool(
            engine_data.get("use_formatter", defaults.use_formatter),
            field_name="engine.use_formatter",
        )

        probe_timeout_seconds = validate_positive_float(
            engine_data.get("probe_timeout_seconds", defaults.probe_timeout_seconds),
            min_value=0.1,
            max_value=120.0,
            field_name="engine.probe_timeout_seconds",
        )

        target_family = validate_simple_command(
            engine_data.get("target_family", defaults.target_family),
            field_name="engine.target_family",
        )

        chunk_size = validate_positive_integer(
            engine_data.get("chunk_size", defaults.chunk_size),
            min_value=1,
            max_value=1024 * 1024,
            field_name="engine.chunk_size",
        )
    except ValidationError as e:
        logger.error(f"Engine configuration validation failed: {e}")
        raise

    return EngineConfig(
        log_level=log_level,
        build_tool=build_tool,
        locator=locator,
        formatter_name=formatter_name,
        formatter_candidates=formatter_candidates,
        use_formatter=use_formatter,
        probe_timeout_seconds=probe_timeout_seconds,
        target_family=target_family,
        chunk_size=chunk_size,
    )
