"""
Remove command.

SUMMARY: Remove the managed block of inherited settings from the active profile
"""

from __future__ import annotations

import argparse
import sys

from inherit_profile.cli import (
    OutputFormatter,
    add_dry_run_flag,
    add_standard_flags,
    load_cli_config,
    report_failure,
)
from inherit_profile.core.orchestrator import remove_inheritance

SUMMARY = "Remove the managed block of inherited settings from the active profile"

REMOVED_MESSAGE = "Inherited settings removed from current profile!"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    add_dry_run_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config = load_cli_config(args)
    except Exception as e:
        formatter.error(e, error_code="config_error")
        return 1

    try:
        result = remove_inheritance(config, dry_run=bool(getattr(args, "dry_run", False)))
    except Exception as e:
        return report_failure(formatter, e, config=config, error_code="remove_error")

    message = REMOVED_MESSAGE
    if result.dry_run:
        message = f"Dry run: managed block for `{result.profile}` would be {result.action}."
    formatter.success(result.to_dict(), message, quiet=not config.show_messages)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
