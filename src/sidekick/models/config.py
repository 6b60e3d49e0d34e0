"""
Configuration data models.

This module contains the engine settings loaded from `config.toml` and the
command hook structures read from the project configuration.
"""

from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_FORMATTER_CANDIDATES = [
    "/opt/homebrew/bin/xcpretty",
    "/usr/local/bin/xcpretty",
    "/usr/bin/xcpretty",
]


@dataclass
class EngineConfig:
    """
    Settings for the build/test execution engine, loaded from `config.toml`.
    """

    # [engine] - all keys optional, defaults below
    log_level: str = "INFO"
    build_tool: str = "/usr/bin/xcodebuild"
    # Toolchain locator used to find the formatter and to reach device tools.
    locator: str = "/usr/bin/xcrun"
    formatter_name: str = "xcpretty"
    formatter_candidates: List[str] = field(
        default_factory=lambda: list(DEFAULT_FORMATTER_CANDIDATES)
    )
    use_formatter: bool = True
    probe_timeout_seconds: float = 5.0
    # Substring matched case-insensitively against simulator names.
    target_family: str = "iphone"
    chunk_size: int = 4096


@dataclass(frozen=True)
class HookSpec:
    """A single pre/post command."""

    command: str
    args: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommandHooks:
    pre: Optional[HookSpec] = None
    post: Optional[HookSpec] = None
