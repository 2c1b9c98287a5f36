"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run flag."""
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be done without making changes",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag (DEBUG logging)."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )


def add_user_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --user-dir flag overriding the editor user directory."""
    parser.add_argument(
        "--user-dir",
        type=str,
        help="Editor user directory (default: detected per platform)",
    )


def add_config_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config-dir flag overriding where YAML configuration is read from."""
    parser.add_argument(
        "--config-dir",
        type=str,
        help="Configuration root holding config/*.yaml (default: ~/.inherit-profile)",
    )


def add_parent_flag(parser: argparse.ArgumentParser) -> None:
    """Add repeatable --parent flag replacing the configured parent list."""
    parser.add_argument(
        "--parent",
        "-p",
        action="append",
        dest="parents",
        metavar="PROFILE",
        help="Parent profile to inherit from (repeatable, in priority order; replaces configured parents)",
    )


def add_no_messages_flag(parser: argparse.ArgumentParser) -> None:
    """Add --no-messages flag (inheritProfile.showMessages = false)."""
    parser.add_argument(
        "--no-messages",
        action="store_true",
        help="Do not print success or failure notifications",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that most commands use.

    Adds: --json, --verbose, --user-dir, --config-dir, --parent, --no-messages
    """
    add_json_flag(parser)
    add_verbose_flag(parser)
    add_user_dir_flag(parser)
    add_config_dir_flag(parser)
    add_parent_flag(parser)
    add_no_messages_flag(parser)


__all__ = [
    "add_json_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_user_dir_flag",
    "add_config_dir_flag",
    "add_parent_flag",
    "add_no_messages_flag",
    "add_standard_flags",
]
