"""Helpers for building note vaults and graphs in tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from notethreads.graph import ThreadGraph


def note_text(prev: str | None = None, thread: bool | None = None, body: str = "") -> str:
    """Build a note with an optional metadata block."""
    lines = []
    if prev is not None:
        lines.append(f"prev: {prev}")
    if thread is not None:
        lines.append(f"thread: {'true' if thread else 'false'}")
    if not lines:
        return body
    return "---\n" + "\n".join(lines) + "\n---\n" + body


def write_note(root: Path, path: str, text: str) -> Path:
    """Write a note under a vault root, creating folders."""
    target = root / path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    return target


def make_graph(
    edges: dict[str, str | None], main: set[str] | frozenset[str] = frozenset()
) -> ThreadGraph:
    """Build a ThreadGraph from node -> prev pairs, in dict order."""
    graph = ThreadGraph()
    for node, prev in edges.items():
        graph.set_prev(node, prev)
        graph.set_main_marker(node, node in main)
    graph.rebuild_next()
    return graph


class FixedClock:
    """Clock returning a fixed time."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now
