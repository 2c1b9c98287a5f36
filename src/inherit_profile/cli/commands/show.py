"""
Show command.

SUMMARY: Show known profiles, the active profile and the settings it would inherit
"""

from __future__ import annotations

import argparse
import json
import sys

from inherit_profile.cli import OutputFormatter, add_standard_flags, load_cli_config, report_failure
from inherit_profile.core.orchestrator import apply_inheritance, resolve_profile_context
from inherit_profile.core.paths import resolve_user_dir
from inherit_profile.core.profiles import list_profiles

SUMMARY = "Show known profiles, the active profile and the settings it would inherit"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config = load_cli_config(args)
    except Exception as e:
        formatter.error(e, error_code="config_error")
        return 1

    try:
        context = resolve_profile_context(resolve_user_dir(config))
        result = apply_inheritance(config, context=context, dry_run=True)
    except Exception as e:
        return report_failure(formatter, e, config=config, error_code="show_error")

    profiles = list_profiles(context.profile_map)
    if formatter.json_mode:
        formatter.json_output(
            {
                "user_dir": str(context.user_dir),
                "profiles": {p.name: str(p.directory) for p in profiles},
                "current_profile": context.current_profile,
                "parents": list(config.parents),
                "settings_path": str(result.settings_path),
                "inherited": result.inherited,
                "action": result.action,
            }
        )
        return 0

    formatter.text(f"User directory: {context.user_dir}")
    formatter.text("Profiles:")
    for profile in profiles:
        marker = "*" if profile.name == context.current_profile else " "
        formatter.text(f" {marker} {profile.name}: {profile.directory}")
    formatter.text(f"Parents: {', '.join(config.parents) or '(none)'}")
    formatter.text(f"Inherited settings ({len(result.inherited)}):")
    for key, value in result.inherited.items():
        formatter.text_kv(key, json.dumps(value, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
