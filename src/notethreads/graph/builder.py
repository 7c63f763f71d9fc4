"""Graph Builder - Populates a ThreadGraph from every document in a store.

One pass over the store: each document's prev reference is cleaned,
resolved to a canonical path and recorded; the next map is inverted
once at the end.
"""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from notethreads.graph.references import BrokenReference, GraphBuildResult
from notethreads.graph.thread_graph import ThreadGraph
from notethreads.store.protocols import DocumentStore, MetadataAccessor, PrevValue
from notethreads.utilities.frontmatter import clean_wikilink

DEFAULT_EXTENSION = ".md"


def extract_prev_reference(prev: PrevValue) -> str | None:
    """Pick the prev reference from a raw metadata value.

    A list contributes only its first element; other shapes and empty
    strings mean no predecessor.
    """
    if isinstance(prev, str):
        return prev if prev.strip() else None
    if isinstance(prev, Sequence) and prev:
        first = prev[0]
        if isinstance(first, str) and first.strip():
            return first
    return None


def fallback_path(reference: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Synthesize a stable node identity for an unresolved reference."""
    return f"{reference}{extension}"


def build_graph(
    store: DocumentStore,
    accessor: MetadataAccessor,
    graph: ThreadGraph,
    extension: str = DEFAULT_EXTENSION,
) -> GraphBuildResult:
    """Rebuild a graph from scratch.

    Documents whose metadata cannot be read become roots rather than
    aborting the build.

    Args:
        store: Source of document paths.
        accessor: Metadata lookup and reference resolution.
        graph: Graph to clear and repopulate.
        extension: Appended to unresolved references.

    Returns:
        GraphBuildResult with counts and broken references.
    """
    graph.clear()
    result = GraphBuildResult()

    for path in store.list_all():
        try:
            metadata = accessor.get_metadata(path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Could not read metadata for {}: {}", path, e)
            result.failed_documents.append(path)
            graph.set_prev(path, None)
            continue

        graph.set_main_marker(path, bool(metadata.is_main_thread))

        raw = extract_prev_reference(metadata.prev)
        reference = clean_wikilink(raw) if raw else ""
        if not reference:
            graph.set_prev(path, None)
            continue

        try:
            resolved = accessor.resolve_reference(reference, path)
        except (OSError, ValueError) as e:
            logger.warning("Could not resolve {!r} from {}: {}", reference, path, e)
            resolved = None
        if resolved is None:
            resolved = fallback_path(reference, extension)
            result.broken_references.append(BrokenReference(path, reference, resolved))
        graph.set_prev(path, resolved)

    graph.rebuild_next()
    result.node_count = graph.node_count()

    logger.debug("Thread graph built: {}", graph.to_debug_dict())
    logger.info(
        "Thread graph built: {} nodes, {} broken references",
        result.node_count,
        len(result.broken_references),
    )
    return result


__all__ = ["build_graph", "extract_prev_reference", "fallback_path", "DEFAULT_EXTENSION"]
