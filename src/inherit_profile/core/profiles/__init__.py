"""Profile discovery: the global store and the name -> directory map."""
from __future__ import annotations

from .resolver import ProfileDescriptor, list_profiles, resolve_profile_dir, resolve_profile_map
from .storage import (
    DEFAULT_PROFILE_NAME,
    find_by_id,
    get_current_profile_name,
    get_custom_profiles,
    get_global_storage_path,
    read_global_storage,
)

__all__ = [
    "DEFAULT_PROFILE_NAME",
    "ProfileDescriptor",
    "find_by_id",
    "get_current_profile_name",
    "get_custom_profiles",
    "get_global_storage_path",
    "list_profiles",
    "read_global_storage",
    "resolve_profile_dir",
    "resolve_profile_map",
]
