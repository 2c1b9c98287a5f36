"""
Command-line interface.

Commands are auto-discovered from ``cli/commands/*.py``: each module exposes
``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Configuration loading and failure reporting
"""
from ._output import OutputFormatter
from ._args import (
    add_config_dir_flag,
    add_dry_run_flag,
    add_json_flag,
    add_no_messages_flag,
    add_parent_flag,
    add_standard_flags,
    add_user_dir_flag,
    add_verbose_flag,
)
from ._utils import build_config_overrides, load_cli_config, report_failure

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_config_dir_flag",
    "add_dry_run_flag",
    "add_json_flag",
    "add_no_messages_flag",
    "add_parent_flag",
    "add_standard_flags",
    "add_user_dir_flag",
    "add_verbose_flag",
    # Utilities
    "build_config_overrides",
    "load_cli_config",
    "report_failure",
]
