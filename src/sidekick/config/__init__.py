"""
Configuration management for the sidekick package.

Loads, validates and caches the engine settings stored in `config.toml`.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_path,
    is_config_loaded,
    set_config_path,
)

# Lower-level access to loading and validation
from .loader import load_engine_section, load_toml_file
from .validators import validate_engine_config

__all__ = [
    "clear_config_cache",
    "get_config",
    "get_config_path",
    "is_config_loaded",
    "set_config_path",
    "load_engine_section",
    "load_toml_file",
    "validate_engine_config",
]
