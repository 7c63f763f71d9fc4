"""Reference records produced while building the thread graph."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BrokenReference:
    """A prev reference that did not resolve to an existing document.

    The graph still gets an edge to ``target``, the synthesized path.

    Attributes:
        source: Path of the document holding the reference.
        reference: The bare reference text after link cleanup.
        target: Fallback path used as the predecessor node.
    """

    source: str
    reference: str
    target: str

    def __str__(self) -> str:
        return f"{self.source} --[prev]--> {self.target} (missing)"


@dataclass
class GraphBuildResult:
    """Summary of one full graph build.

    Attributes:
        node_count: Documents scanned into the graph.
        broken_references: Prev references that fell back to a synthesized path.
        failed_documents: Documents whose metadata could not be read.
    """

    node_count: int = 0
    broken_references: list[BrokenReference] = field(default_factory=list)
    failed_documents: list[str] = field(default_factory=list)

    def has_broken_references(self) -> bool:
        return len(self.broken_references) > 0


__all__ = ["BrokenReference", "GraphBuildResult"]
