"""
notethreads.commands.show - Print the thread around a note.

- `notethreads show NOTE` - main chain with the current note marked, then replies
- `notethreads show NOTE --json` - same data as JSON
"""

from __future__ import annotations

import argparse
import json
import sys

from notethreads.commands._shared import load_app, vault_path
from notethreads.errors import ThreadCycleError


def run(args: argparse.Namespace) -> int:
    """Run the show command."""
    app = load_app(args)
    path = vault_path(app, args.note)

    if not app.graph.has_node(path):
        print(f"Unknown note: {path}", file=sys.stderr)
        return 1

    try:
        data = app.thread_data(path)
    except ThreadCycleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if getattr(args, "json", False):
        print(json.dumps(data.to_dict(), indent=2))
        return 0

    print("Thread:")
    for note in data.main_chain.notes:
        marker = "*" if note.path == path else " "
        print(f" {marker} {note.path}")

    if data.reply_chains:
        print(f"Replies ({len(data.reply_chains)}):")
        for i, chain in enumerate(data.reply_chains, 1):
            print(f"  [{i}] " + " -> ".join(chain.paths))
    return 0
