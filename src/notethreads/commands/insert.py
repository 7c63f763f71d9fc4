"""
notethreads.commands.insert - Insert a new note after an existing one.

Appends at the end of a chain, or splices between the note and its
main continuation.
"""

from __future__ import annotations

import argparse
import sys

from notethreads.commands._shared import load_app, vault_path


def run(args: argparse.Namespace) -> int:
    """Run the insert command."""
    app = load_app(args)
    path = vault_path(app, args.note)

    if not app.vault.exists(path):
        print(f"No such note: {path}", file=sys.stderr)
        return 1

    next_path = app.graph.get_main_continuation(path)
    created = app.insert_after(path)

    if not getattr(args, "quiet", False):
        if next_path is None:
            print(f"Appended {created.path} after {path}")
        else:
            print(f"Inserted {created.path} between {path} and {next_path}")
    return 0
