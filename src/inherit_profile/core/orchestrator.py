"""Apply or remove inherited settings for the active profile.

Pipeline (apply):
1. Resolve the active profile and its directory from the global store
2. Flatten the profile's own settings, ignoring the current managed block
3. Collect the parents' merged settings in declared order
4. Keep the parent keys the profile does not define
5. Remove the old managed block and insert a new one (when non-empty)

The pipeline is best effort: a failing step is raised to the caller and
nothing written by an earlier step is rolled back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from inherit_profile.core.config import InheritanceConfig
from inherit_profile.core.exceptions import InheritProfileError, SettingsWriteError
from inherit_profile.core.file_io import read_text_or_none, write_text
from inherit_profile.core.jsonc import parse_jsonc
from inherit_profile.core.output import apply_managed_block, remove_managed_block
from inherit_profile.core.paths import resolve_user_dir
from inherit_profile.core.profiles import (
    get_current_profile_name,
    read_global_storage,
    resolve_profile_dir,
    resolve_profile_map,
)
from inherit_profile.core.settings import (
    SETTINGS_FILENAME,
    FlatOverlay,
    collect_profile_settings,
    compute_inherited_settings,
    flatten_settings,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileContext:
    """Everything resolved from one read of the global store."""

    user_dir: Path
    profile_map: Dict[str, Path]
    current_profile: str
    current_dir: Path

    @property
    def settings_path(self) -> Path:
        return self.current_dir / SETTINGS_FILENAME


@dataclass(frozen=True)
class InheritanceResult:
    """Outcome of one apply/remove run."""

    profile: str
    settings_path: Path
    action: str
    changed: bool
    inherited: FlatOverlay = field(default_factory=dict)
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile,
            "settings_path": str(self.settings_path),
            "action": self.action,
            "changed": self.changed,
            "inherited": dict(self.inherited),
            "dry_run": self.dry_run,
        }


def resolve_profile_context(user_dir: Path) -> ProfileContext:
    """Resolve the active profile name and directory under ``user_dir``.

    Raises:
        ProfileNotFoundError: If the store names an active profile that has
            no directory
    """
    storage = read_global_storage(user_dir)
    profile_map = resolve_profile_map(user_dir, storage)
    current = get_current_profile_name(storage)
    return ProfileContext(
        user_dir=Path(user_dir),
        profile_map=profile_map,
        current_profile=current,
        current_dir=resolve_profile_dir(current, profile_map),
    )


def _read_settings_text(path: Path) -> Optional[str]:
    try:
        return read_text_or_none(path)
    except (OSError, UnicodeDecodeError) as exc:
        # Never treat an unreadable file as empty: the write-back would destroy it.
        raise InheritProfileError(
            f"Cannot read settings file {path}: {exc}",
            context={"path": str(path)},
        ) from exc


def _write_settings_text(path: Path, content: str) -> None:
    try:
        write_text(path, content)
    except OSError as exc:
        raise SettingsWriteError(f"Failed to write {path}: {exc}", path=str(path)) from exc


def _parse_own_settings(text: str, source: str) -> Dict[str, Any]:
    try:
        data = parse_jsonc(text)
    except ValueError as exc:
        # An unparsable document hides the keys the profile defines.
        raise InheritProfileError(
            f"Cannot parse settings file {source}: {exc}",
            context={"path": source},
        ) from exc
    if not isinstance(data, dict):
        raise InheritProfileError(
            f"Settings file {source} must contain a JSON object, got {type(data).__name__}",
            context={"path": source},
        )
    return data


def compute_inherited_for_text(
    settings_text: str,
    parents: Mapping[str, Any],
    *,
    source: str = "<text>",
) -> FlatOverlay:
    """Inherited overlay for a settings document, given the parents' merged overlay.

    The document's current managed block is not part of its own settings.

    Raises:
        InheritProfileError: If the document (without its block) is not a
            JSONC object
    """
    own_text = remove_managed_block(settings_text).updated_text
    own = flatten_settings(_parse_own_settings(own_text, source))
    logger.info("Found %d settings in current profile.", len(own))
    return compute_inherited_settings(parents, own)


def apply_inheritance(
    config: InheritanceConfig,
    *,
    context: Optional[ProfileContext] = None,
    dry_run: bool = False,
) -> InheritanceResult:
    """Rewrite the active profile's managed block from its parents' settings."""
    ctx = context or resolve_profile_context(resolve_user_dir(config))
    settings_path = ctx.settings_path
    raw = _read_settings_text(settings_path)

    parent_settings = collect_profile_settings(config.parents, ctx.profile_map)
    logger.info("Found %d settings in parent profiles.", len(parent_settings))

    inherited = compute_inherited_for_text(raw or "", parent_settings, source=str(settings_path))
    logger.info(
        "Found %d inherited settings for `%s` profile.", len(inherited), ctx.current_profile
    )

    if raw is None and not inherited:
        return InheritanceResult(
            profile=ctx.current_profile,
            settings_path=settings_path,
            action="unchanged",
            changed=False,
            dry_run=dry_run,
        )

    result = apply_managed_block(raw or "", inherited, warning=config.block_warning)
    if result.changed and not dry_run:
        logger.info("Merging %d settings into `%s`.", len(inherited), settings_path)
        _write_settings_text(settings_path, result.updated_text)

    return InheritanceResult(
        profile=ctx.current_profile,
        settings_path=settings_path,
        action=result.action,
        changed=result.changed,
        inherited=inherited,
        dry_run=dry_run,
    )


def remove_inheritance(
    config: InheritanceConfig,
    *,
    context: Optional[ProfileContext] = None,
    dry_run: bool = False,
) -> InheritanceResult:
    """Remove the managed block from the active profile's settings.json."""
    ctx = context or resolve_profile_context(resolve_user_dir(config))
    settings_path = ctx.settings_path
    logger.info("Removing inherited settings from `%s`.", settings_path)

    raw = _read_settings_text(settings_path)
    if raw is None:
        return InheritanceResult(
            profile=ctx.current_profile,
            settings_path=settings_path,
            action="unchanged",
            changed=False,
            dry_run=dry_run,
        )

    result = remove_managed_block(raw)
    if result.changed and not dry_run:
        _write_settings_text(settings_path, result.updated_text)

    return InheritanceResult(
        profile=ctx.current_profile,
        settings_path=settings_path,
        action=result.action if result.changed else "unchanged",
        changed=result.changed,
        dry_run=dry_run,
    )


__all__ = [
    "ProfileContext",
    "InheritanceResult",
    "resolve_profile_context",
    "compute_inherited_for_text",
    "apply_inheritance",
    "remove_inheritance",
]
