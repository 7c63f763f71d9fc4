"""ThreadGraph - In-memory graph of note threads.

Three maps keyed by document path:
- prev: explicit predecessor from metadata (None = known root)
- next: derived by inverting prev, never edited directly
- markers: whether a note is marked as a main-thread continuation

The graph is derived state. After any batch of set_prev() calls,
rebuild_next() must run before traversal results are trusted.
"""

from __future__ import annotations

from typing import Any, Iterator

from notethreads.errors import ThreadCycleError


class ThreadGraph:
    """Directed graph over document paths built from prev references.

    Example:
        >>> graph = ThreadGraph()
        >>> graph.set_prev("a.md", None)
        >>> graph.set_prev("b.md", "a.md")
        >>> graph.rebuild_next()
        >>> graph.get_full_thread("b.md")
        ['a.md', 'b.md']
    """

    def __init__(self) -> None:
        self._prev: dict[str, str | None] = {}
        # Lists keep insertion order; the first entry is the fallback main continuation.
        self._next: dict[str, list[str]] = {}
        self._markers: dict[str, bool] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────────

    def set_prev(self, node: str, prev: str | None) -> None:
        """Upsert the explicit predecessor of a node.

        Does not touch the next map; call rebuild_next() afterwards.
        """
        self._prev[node] = prev

    def set_main_marker(self, node: str, is_main: bool) -> None:
        """Upsert the main-thread marker of a node."""
        self._markers[node] = is_main

    def rebuild_next(self) -> None:
        """Recompute the next map by inverting every prev edge."""
        self._next = {}
        for node, prev in self._prev.items():
            if prev is not None:
                self._next.setdefault(prev, []).append(node)

    def clear(self) -> None:
        """Reset the graph to empty."""
        self._prev.clear()
        self._next.clear()
        self._markers.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def get_prev(self, node: str) -> str | None:
        return self._prev.get(node)

    def get_next(self, node: str) -> list[str]:
        """Return successors of a node in insertion order (empty if unknown)."""
        return list(self._next.get(node, ()))

    def is_main_thread(self, node: str) -> bool:
        return self._markers.get(node, False)

    def has_node(self, node: str) -> bool:
        """True if the node has a prev entry (root or not).

        Nodes only referenced as someone's predecessor are not members.
        """
        return node in self._prev

    def get_all_nodes(self) -> list[str]:
        return list(self._prev)

    def iter_nodes(self) -> Iterator[str]:
        yield from self._prev

    def node_count(self) -> int:
        return len(self._prev)

    # ─────────────────────────────────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────────────────────────────────

    def get_main_continuation(self, node: str) -> str | None:
        """Return the preferred successor of a node.

        A successor marked as main thread wins; otherwise the first
        successor by insertion order. None when there are no successors.
        """
        successors = self._next.get(node)
        if not successors:
            return None
        for successor in successors:
            if self.is_main_thread(successor):
                return successor
        return successors[0]

    def get_replies(self, node: str) -> list[str]:
        """Return successors other than the main continuation."""
        main = self.get_main_continuation(node)
        return [s for s in self._next.get(node, ()) if s != main]

    def get_thread_root(self, node: str) -> str:
        """Walk prev edges back to the first node without a predecessor.

        Raises:
            ThreadCycleError: If the walk revisits a node.
        """
        visited: list[str] = [node]
        seen = {node}
        current = node
        prev = self._prev.get(current)
        while prev is not None:
            if prev in seen:
                raise ThreadCycleError(node, visited + [prev], "backward")
            visited.append(prev)
            seen.add(prev)
            current = prev
            prev = self._prev.get(current)
        return current

    def get_forward_chain(self, node: str) -> list[str]:
        """Return the node followed by repeated main continuations.

        Raises:
            ThreadCycleError: If the walk revisits a node.
        """
        chain = [node]
        seen = {node}
        current = self.get_main_continuation(node)
        while current is not None:
            if current in seen:
                raise ThreadCycleError(node, chain + [current], "forward")
            chain.append(current)
            seen.add(current)
            current = self.get_main_continuation(current)
        return chain

    def get_full_thread(self, node: str) -> list[str]:
        """Return the main line from the node's root to its end."""
        return self.get_forward_chain(self.get_thread_root(node))

    def get_reply_chains(self, node: str) -> list[list[str]]:
        """Return the full thread of each reply, in reply order.

        Each chain starts at the reply's own thread root, so it may
        overlap the caller's main chain. Callers de-duplicate if needed.
        """
        return [self.get_full_thread(reply) for reply in self.get_replies(node)]

    # ─────────────────────────────────────────────────────────────────────────
    # Debugging
    # ─────────────────────────────────────────────────────────────────────────

    def to_debug_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of the three maps."""
        return {
            "prev": dict(self._prev),
            "next": {k: list(v) for k, v in self._next.items()},
            "markers": dict(self._markers),
        }

    def __len__(self) -> int:
        return len(self._prev)

    def __contains__(self, node: object) -> bool:
        return node in self._prev


__all__ = ["ThreadGraph"]
