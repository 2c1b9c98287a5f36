"""Map profile names to profile directories."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from inherit_profile.core.exceptions import ProfileNotFoundError

from .storage import DEFAULT_PROFILE_NAME, get_custom_profiles, read_global_storage

PROFILES_DIRNAME = "profiles"


@dataclass(frozen=True)
class ProfileDescriptor:
    """A named profile and the directory holding its settings.json."""

    name: str
    directory: Path


def resolve_profile_map(
    user_dir: Path,
    storage: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Path]:
    """Return a mapping from profile name to profile directory.

    The default profile always exists and lives in ``user_dir`` itself. Custom
    profiles live in ``<user_dir>/profiles/<location>``; records missing a
    name or a location are skipped.
    """
    user_dir = Path(user_dir)
    if storage is None:
        storage = read_global_storage(user_dir)

    profile_map: Dict[str, Path] = {DEFAULT_PROFILE_NAME: user_dir}
    for profile in get_custom_profiles(storage):
        name = profile.get("name")
        location = profile.get("location")
        if name and location:
            profile_map[str(name)] = user_dir / PROFILES_DIRNAME / str(location)
    return profile_map


def list_profiles(profile_map: Mapping[str, Path]) -> List[ProfileDescriptor]:
    return [ProfileDescriptor(name=name, directory=Path(path)) for name, path in profile_map.items()]


def resolve_profile_dir(name: str, profile_map: Mapping[str, Path]) -> Path:
    """Return the directory of ``name``.

    Raises:
        ProfileNotFoundError: If ``name`` is not a known profile
    """
    try:
        return Path(profile_map[name])
    except KeyError:
        raise ProfileNotFoundError(
            f"Profile {name!r} does not exist",
            profile=name,
            context={"known_profiles": sorted(profile_map)},
        ) from None


__all__ = [
    "PROFILES_DIRNAME",
    "ProfileDescriptor",
    "resolve_profile_map",
    "list_profiles",
    "resolve_profile_dir",
]
