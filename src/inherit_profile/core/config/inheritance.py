"""Typed view over the merged configuration.

The pipeline never reads configuration ad hoc: callers build one
:class:`InheritanceConfig` and pass it in explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from .manager import ConfigManager


def _section(cfg: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = cfg.get(name)
    return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True)
class InheritanceConfig:
    parents: Tuple[str, ...] = ()
    run_on_startup: bool = True
    run_on_profile_change: bool = True
    show_messages: bool = True
    user_dir: Optional[Path] = None
    product: str = "Code"
    block_warning: bool = True
    watch_interval_seconds: float = 1.0
    log_level: str = "WARNING"
    log_path: Optional[Path] = None

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "InheritanceConfig":
        """Build from a merged configuration dictionary (see ConfigManager)."""
        inherit = _section(cfg, "inheritProfile")
        paths = _section(cfg, "paths")
        block = _section(cfg, "block")
        watch = _section(cfg, "watch")
        logging_cfg = _section(cfg, "logging")

        user_dir = str(paths.get("user_dir") or "").strip()
        log_path = str(logging_cfg.get("path") or "").strip()
        return cls(
            parents=tuple(str(p) for p in (inherit.get("parents") or [])),
            run_on_startup=bool(inherit.get("runOnStartup", True)),
            run_on_profile_change=bool(inherit.get("runOnProfileChange", True)),
            show_messages=bool(inherit.get("showMessages", True)),
            user_dir=Path(user_dir).expanduser() if user_dir else None,
            product=str(paths.get("product") or "Code"),
            block_warning=bool(block.get("warning", True)),
            watch_interval_seconds=float(watch.get("interval_seconds", 1.0)),
            log_level=str(logging_cfg.get("level") or "WARNING").upper(),
            log_path=Path(log_path).expanduser() if log_path else None,
        )


def load_inheritance_config(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    user_config_dir: Optional[Path] = None,
) -> InheritanceConfig:
    """Load every configuration layer and return the typed view."""
    cfg = ConfigManager(user_config_dir=user_config_dir).load_config(overrides=overrides)
    return InheritanceConfig.from_mapping(cfg)


__all__ = ["InheritanceConfig", "load_inheritance_config"]
