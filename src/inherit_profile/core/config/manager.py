"""
Configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import jsonschema
import yaml

from inherit_profile.core.exceptions import ConfigError
from inherit_profile.data import get_data_path, read_yaml

from .merge import deep_merge

logger = logging.getLogger(__name__)

ENV_PREFIX = "INHERIT_PROFILE_"
CONFIG_DIR_ENV = "INHERIT_PROFILE_CONFIG_DIR"
DEFAULT_USER_CONFIG_DIR = ".inherit-profile"
SCHEMA_FILENAME = "config.yaml"


def get_user_config_dir() -> Path:
    """Return the user-level configuration root (default ``~/.inherit-profile``)."""
    raw = os.environ.get(CONFIG_DIR_ENV, "").strip() or DEFAULT_USER_CONFIG_DIR
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = Path.home() / p
    return p


class ConfigManager:
    """Load, merge, and validate configuration.

    Configuration sources (highest to lowest priority):
    1. Explicit overrides passed to :meth:`load_config` (CLI flags)
    2. Environment variables: INHERIT_PROFILE_<section>__<key>
    3. User config: <user-config-dir>/config/*.yaml (alphabetical order)
    4. Bundled defaults: inherit_profile.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, user_config_dir: Optional[Path] = None) -> None:
        root = Path(user_config_dir) if user_config_dir is not None else get_user_config_dir()
        self.core_config_dir = get_data_path("config")
        self.user_config_dir = root / "config"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Invalid configuration file {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping", context={"path": str(path)})
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        """Merge every ``*.yaml``/``*.yml`` file of ``directory`` into ``cfg``."""
        d = Path(directory)
        if not d.is_dir():
            return cfg
        files = sorted(p for p in d.iterdir() if p.is_file() and p.suffix in (".yaml", ".yml"))
        for path in files:
            cfg = deep_merge(cfg, self.load_yaml(path))
            logger.debug("Merged configuration layer %s", path)
        return cfg

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == CONFIG_DIR_ENV:
                continue
            raw = key[len(ENV_PREFIX) :]
            segments = raw.split("__")
            if len(segments) < 2 or any(not seg for seg in segments):
                logger.warning("Ignoring malformed configuration override %s", key)
                continue
            yield segments, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for i, part in enumerate(path):
            # Env var names lose their case; match existing keys case-insensitively.
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key_to_use = key_candidates.get(part.lower(), part)
            if i == len(path) - 1:
                cur[key_to_use] = value
                return
            if not isinstance(cur.get(key_to_use), dict):
                cur[key_to_use] = {}
            cur = cur[key_to_use]

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ========== Validation ==========

    def validate_schema(self, config: Mapping[str, Any]) -> None:
        schema = read_yaml("schemas", SCHEMA_FILENAME)
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
        if errors:
            messages = [
                f"{'.'.join(str(p) for p in err.path) or '<root>'}: {err.message}" for err in errors
            ]
            raise ConfigError(
                "Invalid configuration: " + "; ".join(messages),
                context={"errors": messages},
            )

    # ========== Loading ==========

    def load_config(
        self,
        *,
        validate: bool = True,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Load and merge configuration from every source.

        Args:
            validate: If True, validate against the bundled JSON schema
            overrides: Highest priority values (e.g. from CLI flags)

        Returns:
            Merged configuration dictionary
        """
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.user_config_dir, cfg)
        cfg = copy.deepcopy(cfg)
        self.apply_env_overrides(cfg)
        if overrides:
            cfg = deep_merge(cfg, dict(overrides))
        if validate:
            self.validate_schema(cfg)
        return cfg


__all__ = ["ConfigManager", "get_user_config_dir", "ENV_PREFIX", "CONFIG_DIR_ENV"]
