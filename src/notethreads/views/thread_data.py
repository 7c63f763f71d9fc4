"""Thread data loading for views.

The main chain is the graph's full thread. Reply chains start at each
reply and follow main continuations forward, so they never repeat the
notes already shown in the main chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from notethreads.graph.thread_graph import ThreadGraph
from notethreads.store.vault import Vault
from notethreads.utilities.frontmatter import split_frontmatter


@dataclass
class NoteContent:
    """A loaded note.

    Attributes:
        path: Document path.
        frontmatter: Metadata block including delimiters ("" if none).
        body: Text after the metadata block.
        ctime: Creation time, used to order reply chains.
    """

    path: str
    frontmatter: str
    body: str
    ctime: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "frontmatter": self.frontmatter,
            "body": self.body,
            "ctime": self.ctime,
        }


@dataclass
class ThreadChain:
    notes: list[NoteContent] = field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [n.path for n in self.notes]


@dataclass
class ThreadData:
    """Everything a thread view renders for one opened note."""

    current_path: str
    main_chain: ThreadChain
    reply_chains: list[ThreadChain] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_path": self.current_path,
            "main_chain": self.main_chain.paths,
            "reply_chains": [c.paths for c in self.reply_chains],
        }


def load_note_content(vault: Vault, path: str) -> NoteContent | None:
    """Load a note, or None if the document does not exist."""
    if not vault.exists(path):
        return None
    frontmatter, body = split_frontmatter(vault.read(path))
    return NoteContent(path=path, frontmatter=frontmatter, body=body, ctime=vault.ctime(path))


def _load_chain(vault: Vault, paths: list[str]) -> ThreadChain:
    notes = [load_note_content(vault, p) for p in paths]
    return ThreadChain(notes=[n for n in notes if n is not None])


def load_thread_data(graph: ThreadGraph, vault: Vault, path: str) -> ThreadData:
    """Assemble the main chain and reply chains around a note.

    Dangling nodes are skipped, empty reply chains dropped, and reply
    chains ordered by the creation time of their first note.

    Raises:
        ThreadCycleError: If the note sits on a prev cycle.
    """
    main_chain = _load_chain(vault, graph.get_full_thread(path))

    reply_chains = []
    for reply in graph.get_replies(path):
        chain = _load_chain(vault, graph.get_forward_chain(reply))
        if chain.notes:
            reply_chains.append(chain)
    reply_chains.sort(key=lambda c: c.notes[0].ctime)

    return ThreadData(current_path=path, main_chain=main_chain, reply_chains=reply_chains)


__all__ = ["NoteContent", "ThreadChain", "ThreadData", "load_note_content", "load_thread_data"]
