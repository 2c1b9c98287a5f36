"""JSON-with-comments scanning and reading."""
from __future__ import annotations

from .reader import parse_jsonc, parse_jsonc_object, read_jsonc
from .scanner import (
    detect_indent,
    find_trailing_separator,
    last_meaningful_index,
    needs_separator,
    strip_trailing_separator,
)

__all__ = [
    "parse_jsonc",
    "parse_jsonc_object",
    "read_jsonc",
    "detect_indent",
    "find_trailing_separator",
    "last_meaningful_index",
    "needs_separator",
    "strip_trailing_separator",
]
