"""Writers for text the tool owns inside user files."""
from __future__ import annotations

from .managed_blocks import (
    END_MARKER,
    START_MARKER,
    WARNING_LINES,
    ManagedBlockResult,
    apply_managed_block,
    has_managed_block,
    insert_managed_block,
    remove_managed_block,
    render_managed_block,
)

__all__ = [
    "END_MARKER",
    "START_MARKER",
    "WARNING_LINES",
    "ManagedBlockResult",
    "apply_managed_block",
    "has_managed_block",
    "insert_managed_block",
    "remove_managed_block",
    "render_managed_block",
]
