"""
Logging configuration for the engine.

Diagnostics go to stderr so they never mix into the build output mirrored
on stdout.
"""

import logging
import sys
from typing import IO, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[Union[str, int]] = None, stream: Optional[IO] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Level name or number; defaults to the configured ``log_level``
        stream: Destination stream, stderr by default
    """
    if level is None:
        from .config import get_config

        level = get_config().log_level
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )
