"""
Apply command.

SUMMARY: Write the parents' settings into the active profile's managed block
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
from inherit_profile.core.orchestrator import apply_inheritance

SUMMARY = "Write the parents' settings into the active profile's managed block"

APPLIED_MESSAGE = "Inherited profile settings applied!"


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
        result = apply_inheritance(config, dry_run=bool(getattr(args, "dry_run", False)))
    except Exception as e:
        return report_failure(formatter, e, config=config, error_code="apply_error")

    message = APPLIED_MESSAGE
    if result.dry_run:
        message = f"Dry run: {len(result.inherited)} inherited settings for `{result.profile}` ({result.action})."
    formatter.success(result.to_dict(), message, quiet=not config.show_messages)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
