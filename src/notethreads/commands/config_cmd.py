"""
notethreads.commands.config_cmd - Inspect configuration.

- `notethreads config path` - which .notethreads.toml is in effect
- `notethreads config show` - the merged configuration as TOML
"""

from __future__ import annotations

import argparse
import sys

import tomlkit

from notethreads.commands._shared import resolve_config


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    from notethreads.config import find_config_file

    action = getattr(args, "config_action", None)

    if action == "path":
        path = getattr(args, "config", None) or find_config_file()
        if path is None:
            print("No .notethreads.toml found (using defaults)")
            return 1
        print(path)
        return 0
    elif action == "show":
        print(tomlkit.dumps(resolve_config(args)), end="")
        return 0
    else:
        print("Usage: notethreads config <path|show>", file=sys.stderr)
        return 1
