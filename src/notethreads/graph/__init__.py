"""Graph module - Thread graph data structures.

Exports:
- ThreadGraph: prev/next/marker maps with traversal queries
- build_graph: full rebuild from a document store
- BrokenReference: prev reference that did not resolve
- GraphBuildResult: summary of a full build
- ThreadCycleError: raised when a walk revisits a node
"""

from notethreads.errors import ThreadCycleError
from notethreads.graph.builder import build_graph
from notethreads.graph.references import BrokenReference, GraphBuildResult
from notethreads.graph.thread_graph import ThreadGraph

__all__ = [
    "ThreadGraph",
    "build_graph",
    "BrokenReference",
    "GraphBuildResult",
    "ThreadCycleError",
]
