"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the engine's TOML
configuration file.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import handle_config_error, ErrorSeverity

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.debug(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def load_engine_section(config_path: Path) -> Dict[str, Any]:
    """
    Load the `[engine]` table of the main configuration file.

    A missing file is not an error: the engine runs on defaults.
    """
    if not config_path.exists():
        logger.debug(f"No configuration file at {config_path}, using defaults")
        return {}
    data = load_toml_file(config_path, "engine configuration file")
    engine = data.get("engine", {})
    if not isinstance(engine, dict):
        raise TypeError(f"[engine] in {config_path} must be a table")
    return engine
