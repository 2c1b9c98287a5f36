"""Configuration loading: bundled defaults, user YAML, environment, CLI."""
from __future__ import annotations

from .inheritance import InheritanceConfig, load_inheritance_config
from .manager import ConfigManager, get_user_config_dir
from .merge import deep_merge, merge_arrays

__all__ = [
    "ConfigManager",
    "InheritanceConfig",
    "deep_merge",
    "get_user_config_dir",
    "load_inheritance_config",
    "merge_arrays",
]
