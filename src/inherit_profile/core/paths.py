"""Locate the editor's user directory (the root configuration directory).

Precedence (highest to lowest):
1. ``paths.user_dir`` from configuration (``--user-dir`` on the CLI)
2. Platform default for ``paths.product``:
   - Windows: ``%APPDATA%/<product>/User``
   - macOS: ``~/Library/Application Support/<product>/User``
   - Linux and others: ``$XDG_CONFIG_HOME/<product>/User`` (``~/.config`` when unset)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from inherit_profile.core.config import InheritanceConfig

USER_DIRNAME = "User"


def get_default_user_dir(
    product: str = "Code",
    *,
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return the platform default user directory for ``product``."""
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    home = Path(home) if home is not None else Path.home()

    if platform.startswith("win"):
        appdata = environ.get("APPDATA", "").strip()
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
    elif platform == "darwin":
        base = home / "Library" / "Application Support"
    else:
        xdg = environ.get("XDG_CONFIG_HOME", "").strip()
        base = Path(xdg) if xdg else home / ".config"
    return base / product / USER_DIRNAME


def resolve_user_dir(config: InheritanceConfig) -> Path:
    """Return the user directory configured in ``config``, or the platform default."""
    if config.user_dir is not None:
        return Path(config.user_dir)
    return get_default_user_dir(config.product)


__all__ = ["USER_DIRNAME", "get_default_user_dir", "resolve_user_dir"]
