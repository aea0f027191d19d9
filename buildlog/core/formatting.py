"""Conversion of arbitrary log message parts into strings."""

from __future__ import annotations

from typing import Any

from rich.pretty import pretty_repr

# Nesting deeper than this is elided; also bounds output for cyclic or
# very large structures.
MAX_DEPTH = 3
MAX_LENGTH = 100
MAX_STRING = 1000


def format_message_part(part: Any) -> str:
    """Return *part* verbatim if it is a string, else a bounded repr."""
    if isinstance(part, str):
        return part
    return pretty_repr(
        part,
        max_depth=MAX_DEPTH,
        max_length=MAX_LENGTH,
        max_string=MAX_STRING,
        expand_all=False,
    )


def format_message(*parts: Any) -> str:
    """Format every part and join them with a single space."""
    return " ".join(format_message_part(part) for part in parts)
