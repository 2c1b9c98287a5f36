"""Compute the settings a profile inherits from its parents.

Inheritance is decided by key presence only: once a profile defines a key
itself, that key is never inherited, even when the parent's value is equal.
"""
from __future__ import annotations

from typing import Any, Mapping

from .flatten import FlatOverlay


def subtract_settings(base: Mapping[str, Any], to_remove: Mapping[str, Any]) -> FlatOverlay:
    """Return every entry of ``base`` whose key is absent from ``to_remove``, sorted by key."""
    return {key: base[key] for key in sorted(base) if key not in to_remove}


def compute_inherited_settings(
    parent_settings: Mapping[str, Any],
    own_settings: Mapping[str, Any],
) -> FlatOverlay:
    """Settings present in the merged parents that the profile does not define."""
    return subtract_settings(parent_settings, own_settings)


__all__ = ["subtract_settings", "compute_inherited_settings"]
