"""JSONC reader for settings and store files.

Comments and trailing commas are removed with the lexical scanner before the
text is handed to :mod:`json`, so files written by the editor (which allow
both) parse the same way the editor reads them.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from inherit_profile.core.file_io import read_text_or_none

from . import scanner

logger = logging.getLogger(__name__)


def parse_jsonc(text: str) -> Any:
    """Parse JSON-with-comments text.

    Raises:
        ValueError: If the text is not valid JSON once comments and trailing
            commas are removed (``json.JSONDecodeError`` is a ``ValueError``)
    """
    kinds = scanner.scan(text)
    cleaned = scanner.strip_comments(text, kinds)
    cleaned = scanner.strip_trailing_commas(cleaned, kinds)
    if not cleaned.strip():
        return {}
    return json.loads(cleaned)


def parse_jsonc_object(text: str, *, source: str = "<text>") -> Dict[str, Any]:
    """Parse ``text`` into a mapping, returning ``{}`` when that is not possible."""
    try:
        data = parse_jsonc(text)
    except ValueError as exc:
        logger.warning("Failed to parse JSONC at %s: %s", source, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Expected a JSON object at %s, got %s", source, type(data).__name__)
        return {}
    return data


def read_jsonc(path: Path) -> Dict[str, Any]:
    """Read a JSONC file into a mapping.

    A missing file is not an error and yields ``{}``. Unreadable or malformed
    files are logged and also yield ``{}``.
    """
    path = Path(path)
    try:
        raw = read_text_or_none(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read JSONC at %s: %s", path, exc)
        return {}
    if raw is None:
        logger.info("No file at %s, treating it as empty.", path)
        return {}
    return parse_jsonc_object(raw, source=str(path))


__all__ = ["parse_jsonc", "parse_jsonc_object", "read_jsonc"]
