"""
Diagnostic extraction from build output.
"""

import re
from typing import List

ERROR_PATTERN = re.compile(r"error:\s*(.+)", re.IGNORECASE)
_ERROR_PREFIX = "error:"


def _drop_leading_error_prefix(message: str) -> str:
    trimmed = message.strip()
    if trimmed.lower().startswith(_ERROR_PREFIX):
        return trimmed[len(_ERROR_PREFIX):].strip()
    return trimmed


def extract_errors(output: str) -> List[str]:
    """Collect "error:" lines, normalized and de-duplicated in order of first appearance.

    >>> extract_errors("a.swift:1: error: boom\\nerror: boom\\nwarning: meh")
    ['error: boom']
    """
    errors: List[str] = []
    seen = set()
    for match in ERROR_PATTERN.finditer(output):
        message = _drop_leading_error_prefix(match.group(1))
        full = f"error: {message}"
        if full not in seen:
            seen.add(full)
            errors.append(full)
    return errors
