"""Flatten nested settings trees and merge them across profiles.

A flattened overlay maps dotted setting keys (``"editor.fontSize"``) to leaf
values. Arrays are leaves, never merged. Overlays are always returned sorted
by key so that anything rendered from them is stable across runs.

Example:
    >>> flatten_settings({"editor": {"fontSize": 14}, "files.autoSave": "off"})
    {'editor.fontSize': 14, 'files.autoSave': 'off'}
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Set

from inherit_profile.core.jsonc import read_jsonc

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

FlatOverlay = Dict[str, Any]


def _canonical(overlay: Mapping[str, Any]) -> FlatOverlay:
    return {key: overlay[key] for key in sorted(overlay)}


def _colliding_keys(overlay: Mapping[str, Any], key: str) -> List[str]:
    """Keys of ``overlay`` that sit on the same path as ``key`` (ancestors or descendants)."""
    parts = key.split(".")
    ancestors = {".".join(parts[:depth]) for depth in range(1, len(parts))}
    prefix = key + "."
    return [k for k in overlay if k in ancestors or k.startswith(prefix)]


def _flatten_into(
    node: Mapping[Any, Any],
    parent_key: str,
    result: FlatOverlay,
    on_path: Set[int],
) -> None:
    if id(node) in on_path:
        logger.warning("Skipping cyclic settings reference at %r.", parent_key or "<root>")
        return
    on_path.add(id(node))
    try:
        for key in sorted(node, key=str):
            value = node[key]
            new_key = f"{parent_key}.{key}" if parent_key else str(key)
            if isinstance(value, Mapping):
                _flatten_into(value, new_key, result, on_path)
            else:
                result[new_key] = value
    finally:
        on_path.discard(id(node))


def flatten_settings(settings: Mapping[Any, Any], parent_key: str = "") -> FlatOverlay:
    """Recursively flatten ``settings`` into a sorted ``{dotted.key: leaf}`` overlay.

    Nested mappings are descended into; scalars and arrays end the recursion.
    Every leaf of the tree is kept, including keys that contain dots themselves
    (``"source.fixAll"`` next to ``"source.fixAll.eslint"``). Flattening an
    already flat overlay returns an equal overlay.
    """
    result: FlatOverlay = {}
    if isinstance(settings, Mapping):
        _flatten_into(settings, parent_key, result, set())
    return _canonical(result)


def merge_flattened_settings(target: Mapping[str, Any], source: Mapping[str, Any]) -> FlatOverlay:
    """Merge two flattened overlays; keys from ``source`` override keys from ``target``.

    A ``target`` key on the same dotted path as a ``source`` key (``a`` against
    ``a.b``) is dropped with a warning, unless ``source`` defines it too.

    Example:
        target = {"editor.fontSize": 14, "files.autoSave": "off"}
        source = {"editor.fontSize": 16}

        result = {"editor.fontSize": 16, "files.autoSave": "off"}
    """
    result: FlatOverlay = dict(target)
    for key in source:
        for existing in _colliding_keys(target, key):
            if existing in source or existing not in result:
                continue
            logger.warning(
                "Setting `%s` is replaced by `%s` from a later profile.", existing, key
            )
            del result[existing]
    result.update(source)
    return _canonical(result)


def read_profile_settings(profile_dir: Path) -> FlatOverlay:
    """Read and flatten ``settings.json`` from a profile directory."""
    settings_path = Path(profile_dir) / SETTINGS_FILENAME
    settings = flatten_settings(read_jsonc(settings_path))
    logger.debug("Found %d settings from `%s`.", len(settings), settings_path)
    return settings


def collect_profile_settings(
    profiles: Iterable[str],
    profile_map: Mapping[str, Path],
) -> FlatOverlay:
    """Collect the flattened settings of ``profiles`` in order.

    Profiles later in the list override settings of earlier ones. Names that
    are not in ``profile_map`` are skipped with a warning.
    """
    names = list(profiles)
    settings: FlatOverlay = {}
    logger.debug("Collecting settings from %d different profiles.", len(names))
    for profile_name in names:
        profile_dir = profile_map.get(profile_name)
        if profile_dir is None:
            logger.warning(
                "Failed to collect settings for profile %s: Profile does not exist.",
                profile_name,
            )
            continue
        settings = merge_flattened_settings(settings, read_profile_settings(profile_dir))
        logger.debug(
            "Merged profile %s into collected settings. Current total settings %d.",
            profile_name,
            len(settings),
        )
    return flatten_settings(settings)


__all__ = [
    "SETTINGS_FILENAME",
    "FlatOverlay",
    "flatten_settings",
    "merge_flattened_settings",
    "read_profile_settings",
    "collect_profile_settings",
]
