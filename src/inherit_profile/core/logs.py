from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from inherit_profile.core.file_io import ensure_directory

_INSTALLED_HANDLER: logging.Handler | None = None
_INSTALLED_TARGET: str | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install one handler on the root logger: a file when ``log_path`` is set, else stderr.

    Idempotent per-process: calling again replaces the previously installed
    handler instead of stacking another one.
    """
    global _INSTALLED_HANDLER, _INSTALLED_TARGET

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _INSTALLED_HANDLER is not None:
        if _INSTALLED_TARGET == target:
            _INSTALLED_HANDLER.setLevel(_level_from_name(level))
            return
        root.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()

    handler: logging.Handler
    if log_path:
        ensure_directory(Path(target).parent)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _INSTALLED_HANDLER = handler
    _INSTALLED_TARGET = target


def suppress_lastresort_in_json_mode() -> None:
    """Keep stdlib logging's lastResort handler from polluting JSON output.

    Python's logging module emits WARNING+ records to stderr through the
    implicit ``lastResort`` handler when no handler is configured. A
    NullHandler on the root logger disables that without changing levels.
    """
    root = logging.getLogger()
    if not root.handlers:
        root.addHandler(logging.NullHandler())


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by :func:`configure_logging`."""
    global _INSTALLED_HANDLER, _INSTALLED_TARGET
    if _INSTALLED_HANDLER is not None:
        logging.getLogger().removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
    _INSTALLED_HANDLER = None
    _INSTALLED_TARGET = None
    logging.getLogger().setLevel(logging.WARNING)


__all__ = ["configure_logging", "suppress_lastresort_in_json_mode", "reset_logging_for_tests"]
