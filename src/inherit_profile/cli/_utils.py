"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from inherit_profile.core.config import InheritanceConfig, load_inheritance_config
from inherit_profile.core.logs import configure_logging, suppress_lastresort_in_json_mode

from ._output import OutputFormatter

logger = logging.getLogger(__name__)


def build_config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate CLI flags into the highest-priority configuration layer."""
    overrides: Dict[str, Any] = {}
    parents = getattr(args, "parents", None)
    if parents:
        overrides.setdefault("inheritProfile", {})["parents"] = list(parents)
    if getattr(args, "no_messages", False):
        overrides.setdefault("inheritProfile", {})["showMessages"] = False
    user_dir = getattr(args, "user_dir", None)
    if user_dir:
        overrides.setdefault("paths", {})["user_dir"] = str(user_dir)
    if getattr(args, "verbose", False):
        overrides.setdefault("logging", {})["level"] = "DEBUG"
    return overrides


def load_cli_config(args: argparse.Namespace) -> InheritanceConfig:
    """Load configuration for a command and set up logging from it."""
    config_dir = getattr(args, "config_dir", None)
    config = load_inheritance_config(
        build_config_overrides(args),
        user_config_dir=Path(config_dir).expanduser() if config_dir else None,
    )
    if getattr(args, "json", False) and config.log_path is None:
        # JSON mode must stay machine-readable: only log to a file.
        suppress_lastresort_in_json_mode()
    else:
        configure_logging(level=config.log_level, log_path=config.log_path)
    return config


def report_failure(
    formatter: OutputFormatter,
    error: Exception,
    *,
    config: Optional[InheritanceConfig],
    error_code: str,
) -> int:
    """Surface a command failure and return the exit code.

    With ``showMessages`` disabled the failure is only logged.
    """
    if config is not None and not config.show_messages and not formatter.json_mode:
        logger.error("%s", error)
    else:
        formatter.error(error, error_code=error_code)
    return 1


__all__ = ["build_config_overrides", "load_cli_config", "report_failure"]
