"""Managed block of inherited settings inside a profile's settings.json.

The block is delimited by two marker comment lines and always sits as the
last top-level members before the document's closing brace::

    {
        "own.setting": true,
        // --- INHERITED SETTINGS MARKER START --- //
        "inherited.setting": 1
        // --- INHERITED SETTINGS MARKER END --- //
    }

Everything outside the block is preserved byte for byte, apart from the one
separator that joins the block to the member before it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from inherit_profile.core.jsonc import scanner

logger = logging.getLogger(__name__)

START_MARKER = "// --- INHERITED SETTINGS MARKER START --- //"
END_MARKER = "// --- INHERITED SETTINGS MARKER END --- //"
WARNING_LINES = (
    "// Settings in this block are inherited from parent profiles and are rewritten automatically.",
    "// To change one, define it above this block instead of editing it here.",
)
EMPTY_DOCUMENT = "{\n}\n"


@dataclass(frozen=True)
class ManagedBlockResult:
    """Result of applying a managed block update."""

    updated_text: str
    changed: bool
    action: str  # "inserted" | "removed" | "replaced" | "unchanged"


def remove_managed_block(existing_text: str) -> ManagedBlockResult:
    """Remove the managed block (markers included) from ``existing_text``.

    Rules:
    - If neither marker exists, or the end marker comes first, nothing changes.
    - If only one marker exists, nothing changes and a warning is logged: the
      block was edited by hand and repairing it could destroy user content.
    - Otherwise the marker lines and everything between them are deleted and
      the separator left dangling before the closing brace is removed.
    """
    start_idx = _find_marker_on_own_line(existing_text, START_MARKER)
    end_idx = (
        _find_marker_on_own_line(existing_text, END_MARKER, from_index=start_idx + len(START_MARKER))
        if start_idx != -1
        else -1
    )

    if start_idx == -1 or end_idx == -1:
        has_start = start_idx != -1
        has_end = _find_marker_on_own_line(existing_text, END_MARKER) != -1
        if has_start != has_end:
            logger.warning(
                "Only the %s marker of the inherited settings block was found; leaving the file untouched.",
                "start" if has_start else "end",
            )
        elif has_start and has_end:
            logger.info("Inherited settings markers are out of order; leaving the file untouched.")
        return ManagedBlockResult(updated_text=existing_text, changed=False, action="unchanged")

    block_start = _line_start_index(existing_text, start_idx)
    block_end = _line_end_index(existing_text, end_idx + len(END_MARKER))
    cleaned = existing_text[:block_start] + existing_text[block_end:]
    cleaned = scanner.strip_trailing_separator(cleaned)

    kinds = scanner.scan(cleaned)
    last = scanner.last_meaningful_index(cleaned, kinds)
    if last == -1 or kinds[last] != scanner.CODE or cleaned[last] != "}":
        # Corrupted input: the block was not followed by the closing brace.
        newline = _newline_for(existing_text)
        cleaned = cleaned.rstrip() + newline + "}" + newline

    return ManagedBlockResult(updated_text=cleaned, changed=cleaned != existing_text, action="removed")


def insert_managed_block(
    existing_text: str,
    settings: Mapping[str, Any],
    *,
    indent: Optional[str] = None,
    warning: bool = True,
) -> ManagedBlockResult:
    """Insert a managed block rendering ``settings`` before the closing brace.

    Does nothing when ``settings`` is empty. Callers must remove any existing
    block first (see :func:`apply_managed_block`).
    """
    if not settings:
        return ManagedBlockResult(updated_text=existing_text, changed=False, action="unchanged")

    text = existing_text
    kinds = scanner.scan(text)
    close_idx = scanner.last_code_index(text, "}", kinds)
    if close_idx == -1:
        text = (text.rstrip() + "\n" if text.strip() else "") + EMPTY_DOCUMENT
        kinds = scanner.scan(text)
        close_idx = scanner.last_code_index(text, "}", kinds)

    newline = _newline_for(text)
    unit = indent if indent is not None else scanner.detect_indent(text)

    before = text[:close_idx]
    tail = text[close_idx:]
    before_kinds = kinds[:close_idx]
    if scanner.needs_separator(before, before_kinds):
        # The separator goes right after the last member, ahead of any comment.
        pos = scanner.last_meaningful_index(before, before_kinds) + 1
        before = before[:pos] + scanner.SEPARATOR + before[pos:]
    before = before.rstrip(" \t")
    if not before.endswith("\n"):
        before += newline

    block = render_managed_block(settings, indent=unit, warning=warning, newline=newline)
    updated = before + block + tail
    return ManagedBlockResult(updated_text=updated, changed=updated != existing_text, action="inserted")


def apply_managed_block(
    existing_text: str,
    settings: Mapping[str, Any],
    *,
    indent: Optional[str] = None,
    warning: bool = True,
) -> ManagedBlockResult:
    """Replace the managed block with one rendering ``settings``.

    Always removes first, so repeated runs never accumulate blocks. An empty
    ``settings`` leaves the document without a block.
    """
    # Sniff before removing: the old block carries the unit it was written with.
    unit = indent if indent is not None else scanner.detect_indent(existing_text)
    removed = remove_managed_block(existing_text)
    inserted = insert_managed_block(removed.updated_text, settings, indent=unit, warning=warning)
    updated = inserted.updated_text

    if updated == existing_text:
        action = "unchanged"
    elif removed.changed and settings:
        action = "replaced"
    elif removed.changed:
        action = "removed"
    else:
        action = "inserted"
    return ManagedBlockResult(updated_text=updated, changed=updated != existing_text, action=action)


def render_managed_block(
    settings: Mapping[str, Any],
    *,
    indent: str = scanner.DEFAULT_INDENT,
    warning: bool = True,
    newline: str = "\n",
) -> str:
    """Render the marker-delimited block, one ``"key": value`` line per setting."""
    entries = [
        f"{json.dumps(key, ensure_ascii=False)}: {json.dumps(value, ensure_ascii=False)}"
        for key, value in settings.items()
    ]
    lines: List[str] = [START_MARKER]
    if warning:
        lines.extend(WARNING_LINES)
    lines.extend(
        entry + (scanner.SEPARATOR if i < len(entries) - 1 else "")
        for i, entry in enumerate(entries)
    )
    lines.append(END_MARKER)
    return "".join(f"{indent}{line}{newline}" for line in lines)


def has_managed_block(text: str) -> bool:
    """Whether ``text`` contains a complete, well-ordered managed block."""
    start_idx = _find_marker_on_own_line(text, START_MARKER)
    if start_idx == -1:
        return False
    return _find_marker_on_own_line(text, END_MARKER, from_index=start_idx + len(START_MARKER)) != -1


def _newline_for(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def _line_start_index(text: str, index: int) -> int:
    """Return the index of the first character of the line containing ``index``."""
    return text.rfind("\n", 0, index) + 1


def _line_end_index(text: str, from_index: int) -> int:
    """Return the index immediately after the line containing from_index."""
    nl = text.find("\n", from_index)
    if nl == -1:
        return len(text)
    return nl + 1


def _find_marker_on_own_line(text: str, marker: str, *, from_index: int = 0) -> int:
    """Find marker ensuring it appears alone on a line (ignoring whitespace)."""
    idx = text.find(marker, from_index)
    while idx != -1:
        if _marker_on_own_line(text, idx, len(marker)):
            return idx
        idx = text.find(marker, idx + len(marker))
    return -1


def _marker_on_own_line(text: str, idx: int, marker_len: int) -> bool:
    left = idx - 1
    while left >= 0 and text[left] != "\n":
        if text[left] not in (" ", "\t", "\r"):
            return False
        left -= 1

    right = idx + marker_len
    while right < len(text) and text[right] != "\n":
        if text[right] not in (" ", "\t", "\r"):
            return False
        right += 1

    return True


__all__ = [
    "START_MARKER",
    "END_MARKER",
    "WARNING_LINES",
    "ManagedBlockResult",
    "remove_managed_block",
    "insert_managed_block",
    "apply_managed_block",
    "render_managed_block",
    "has_managed_block",
]
