"""Read profile information from the editor's global store.

The store (``<user dir>/globalStorage/storage.json``) holds two things we
need:

- ``userDataProfiles``: the custom profiles, each with a ``name`` and a
  ``location`` (the profile's folder under ``<user dir>/profiles``)
- the last known menu bar, whose "Profiles" submenu has a ``checked`` entry
  for the profile currently in use

The store is read fresh on every call; nothing is cached.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from inherit_profile.core.jsonc import read_jsonc

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "Default"
GLOBAL_STORAGE_DIRNAME = "globalStorage"
GLOBAL_STORAGE_FILENAME = "storage.json"
PROFILES_SUBMENU_ID = "submenuitem.Profiles"
PROFILE_ENTRY_PREFIX = "workbench.profiles.actions.profileEntry."
DEFAULT_PROFILE_ENTRY = "__default__profile__"


def get_global_storage_path(user_dir: Path) -> Path:
    """Return the path of the global store file for ``user_dir``."""
    return Path(user_dir) / GLOBAL_STORAGE_DIRNAME / GLOBAL_STORAGE_FILENAME


def read_global_storage(user_dir: Path) -> Dict[str, Any]:
    """Read the global store; any read or parse failure yields ``{}``."""
    return read_jsonc(get_global_storage_path(user_dir))


def get_custom_profiles(storage: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Return the ``userDataProfiles`` records (only the well-formed ones)."""
    profiles = storage.get("userDataProfiles") if isinstance(storage, Mapping) else None
    if not isinstance(profiles, list):
        return []
    return [p for p in profiles if isinstance(p, dict)]


def find_by_id(obj: Any, target_id: str) -> Optional[Dict[str, Any]]:
    """Find the first object whose ``id`` equals ``target_id``, at any depth.

    The search is depth-first in document order and never visits the same
    object twice, so it terminates on self-referencing graphs.
    """
    visited: set[int] = set()
    stack: List[Any] = [obj]
    while stack:
        node = stack.pop()
        if not isinstance(node, (dict, list)) or id(node) in visited:
            continue
        visited.add(id(node))

        if isinstance(node, dict):
            if node.get("id") == target_id:
                return node
            children = list(node.values())
        else:
            children = list(node)
        # Reverse so the first child is searched first.
        stack.extend(reversed(children))
    return None


def _profile_name_for_entry(entry: Mapping[str, Any], profiles: List[Dict[str, Any]]) -> str:
    entry_id = entry.get("id")
    if isinstance(entry_id, str) and entry_id.startswith(PROFILE_ENTRY_PREFIX):
        profile_id = entry_id[len(PROFILE_ENTRY_PREFIX) :]
        if profile_id == DEFAULT_PROFILE_ENTRY:
            return DEFAULT_PROFILE_NAME
        for profile in profiles:
            if profile.get("location") == profile_id and profile.get("name"):
                return str(profile["name"])

    label = entry.get("label")
    if isinstance(label, str) and label:
        return label
    return DEFAULT_PROFILE_NAME


def get_current_profile_name(storage: Mapping[str, Any]) -> str:
    """Return the name of the active profile recorded in ``storage``.

    Falls back to ``"Default"`` when the store has no checked profile entry.
    """
    submenu = find_by_id(storage, PROFILES_SUBMENU_ID)
    if submenu is None:
        return DEFAULT_PROFILE_NAME

    menu = submenu.get("submenu")
    items = menu.get("items") if isinstance(menu, dict) else None
    if not isinstance(items, list):
        logger.warning("Profiles submenu in the global store has no items.")
        return DEFAULT_PROFILE_NAME

    for item in items:
        if isinstance(item, dict) and item.get("checked"):
            return _profile_name_for_entry(item, get_custom_profiles(storage))
    return DEFAULT_PROFILE_NAME


__all__ = [
    "DEFAULT_PROFILE_NAME",
    "PROFILES_SUBMENU_ID",
    "PROFILE_ENTRY_PREFIX",
    "get_global_storage_path",
    "read_global_storage",
    "get_custom_profiles",
    "find_by_id",
    "get_current_profile_name",
]
