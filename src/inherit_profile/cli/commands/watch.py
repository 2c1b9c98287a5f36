"""
Watch command.

SUMMARY: Keep the active profile's inherited settings current until interrupted
"""

from __future__ import annotations

import argparse
import logging
import sys

from inherit_profile.cli import (
    OutputFormatter,
    add_standard_flags,
    load_cli_config,
    report_failure,
)
from inherit_profile.core.config import InheritanceConfig
from inherit_profile.core.orchestrator import apply_inheritance
from inherit_profile.core.paths import resolve_user_dir
from inherit_profile.core.watcher import ProfileWatcher

from .apply import APPLIED_MESSAGE

SUMMARY = "Keep the active profile's inherited settings current until interrupted"

logger = logging.getLogger(__name__)


def _positive_seconds(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value!r}") from None
    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"interval must be greater than 0, got {value}")
    return seconds


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    parser.add_argument(
        "--interval",
        type=_positive_seconds,
        default=None,
        help="Seconds between checks of the active profile (default: watch.interval_seconds)",
    )


def _apply(formatter: OutputFormatter, config: InheritanceConfig) -> None:
    try:
        result = apply_inheritance(config)
    except Exception as e:
        report_failure(formatter, e, config=config, error_code="apply_error")
        return
    formatter.success(result.to_dict(), APPLIED_MESSAGE, quiet=not config.show_messages)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config = load_cli_config(args)
    except Exception as e:
        formatter.error(e, error_code="config_error")
        return 1

    if config.run_on_startup:
        _apply(formatter, config)

    if not config.run_on_profile_change:
        logger.info("runOnProfileChange is disabled; nothing to watch.")
        return 0

    interval = args.interval if getattr(args, "interval", None) is not None else config.watch_interval_seconds
    watcher = ProfileWatcher(
        resolve_user_dir(config),
        lambda _previous, _current: _apply(formatter, config),
        interval_seconds=interval,
    )
    try:
        with watcher:
            watcher.wait()
    except KeyboardInterrupt:
        logger.info("Stopped watching for profile changes.")
        return 0
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
