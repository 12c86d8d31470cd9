"""
rootline.commands.config_cmd - Inspect and create configuration files.
"""

import argparse
import json
import sys
from pathlib import Path

import tomlkit

from rootline.commands.common import load_command_config
from rootline.config import CONFIG_FILENAME, find_config_file, render_default_config


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)
    if action == "show":
        return run_show(args)
    if action == "path":
        return run_path(args)
    if action == "init":
        return run_init(args)

    print("Usage: rootline config {show|path|init}")
    return 1


def run_show(args: argparse.Namespace) -> int:
    """Print the merged configuration (defaults, files, env overrides)."""
    config = load_command_config(args)
    if getattr(args, "json", False):
        print(json.dumps(config.as_dict(), indent=2))
    else:
        print(tomlkit.dumps(config.as_dict()), end="")
    return 0


def run_path(args: argparse.Namespace) -> int:
    """Print the config file in use, if any."""
    config_path = args.config or find_config_file(Path.cwd())
    if config_path is None:
        print(f"No {CONFIG_FILENAME} found (using defaults)")
        return 1
    print(config_path)
    return 0


def run_init(args: argparse.Namespace) -> int:
    """Write a default .rootline.toml to the current directory."""
    target = Path.cwd() / CONFIG_FILENAME
    if target.exists() and not getattr(args, "force", False):
        print(f"Error: {target} already exists (use --force to overwrite)", file=sys.stderr)
        return 1
    target.write_text(render_default_config(), encoding="utf-8")
    print(f"Created {target}")
    return 0
