"""Settings flattening, merging and inheritance."""
from __future__ import annotations

from .flatten import (
    SETTINGS_FILENAME,
    FlatOverlay,
    collect_profile_settings,
    flatten_settings,
    merge_flattened_settings,
    read_profile_settings,
)
from .inheritance import compute_inherited_settings, subtract_settings

__all__ = [
    "SETTINGS_FILENAME",
    "FlatOverlay",
    "collect_profile_settings",
    "flatten_settings",
    "merge_flattened_settings",
    "read_profile_settings",
    "compute_inherited_settings",
    "subtract_settings",
]
