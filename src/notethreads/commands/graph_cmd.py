"""
notethreads.commands.graph_cmd - Dump the thread graph.

Lists every node with its predecessor and successors, then any prev
references that did not resolve.
"""

from __future__ import annotations

import argparse
import json

from notethreads.commands._shared import load_app


def run(args: argparse.Namespace) -> int:
    """Run the graph command."""
    app = load_app(args)
    graph = app.graph
    build = app.last_build

    if getattr(args, "json", False):
        payload = graph.to_debug_dict()
        payload["broken_references"] = [
            {"source": b.source, "reference": b.reference, "target": b.target}
            for b in (build.broken_references if build else [])
        ]
        print(json.dumps(payload, indent=2))
        return 0

    for node in sorted(graph.iter_nodes()):
        prev = graph.get_prev(node) or "-"
        marker = " [main]" if graph.is_main_thread(node) else ""
        successors = ", ".join(graph.get_next(node)) or "-"
        print(f"{node}{marker}\n    prev: {prev}\n    next: {successors}")

    if build and build.broken_references:
        print(f"\nBroken references: {len(build.broken_references)}")
        for ref in build.broken_references:
            print(f"  {ref}")

    # Broken references are reported, not failures
    return 0
