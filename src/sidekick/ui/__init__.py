"""
Terminal user interface helpers: raw-mode key input, the interactive
list selector and the loading spinner.
"""

from .selector import InteractiveSelector, SelectionMenu, SKIP_INDEX, select
from .spinner import LoadingSpinner, with_spinner
from .terminal import Key, TerminalController, parse_key

__all__ = [
    "InteractiveSelector",
    "SelectionMenu",
    "SKIP_INDEX",
    "select",
    "LoadingSpinner",
    "with_spinner",
    "Key",
    "TerminalController",
    "parse_key",
]
