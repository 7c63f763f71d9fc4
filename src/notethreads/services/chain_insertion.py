"""ChainInsertionService - Splices a new note into a thread.

Steps, in order:
1. build_insertion_context: read the source title and its main continuation
2. create_note: write a new note whose prev points at the source
3. calculate_mutations: mid-chain only, repoint the old continuation
4. apply_mutations: rewrite metadata blocks in the store
5. update_graph: patch the in-memory graph to match
6. notify the orchestrator

Store writes always happen before graph updates. Nothing is rolled back
on failure; a full rebuild from the store reconciles the graph.
"""

from __future__ import annotations

import posixpath
from datetime import datetime, timedelta
from typing import Callable

from loguru import logger

from notethreads.graph.thread_graph import ThreadGraph
from notethreads.services.insertion_types import (
    CreatedNote,
    FrontmatterMutation,
    InsertionContext,
)
from notethreads.store.protocols import DocumentStore, MetadataAccessor
from notethreads.store.vault import normalize_path
from notethreads.utilities.frontmatter import (
    MAIN_MARKER_PROPERTY,
    PREV_PROPERTY,
    format_wikilink,
    serialize_frontmatter,
    upsert_property,
)

# Attempts at a free name when the clock repeats
MAX_NAME_ATTEMPTS = 1000


def generate_note_name(now: datetime) -> str:
    """Format a timestamp as a sortable note name: YYYYMMDD-HHmmss-SSS."""
    return f"{now:%Y%m%d-%H%M%S}-{now.microsecond // 1000:03d}"


class ChainInsertionService:
    """Creates notes after a source note and keeps the chain linked.

    Args:
        store: Document store for reads and writes.
        accessor: Metadata accessor, used for titles and link resolution.
        graph: The shared thread graph.
        on_graph_update: Called once after each completed insertion.
        get_folder: Returns the target folder for new notes ("" = root).
        extension: Extension for new notes.
        clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        store: DocumentStore,
        accessor: MetadataAccessor,
        graph: ThreadGraph,
        on_graph_update: Callable[[], None] | None = None,
        get_folder: Callable[[], str] | None = None,
        extension: str = ".md",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.accessor = accessor
        self.graph = graph
        self.on_graph_update = on_graph_update or (lambda: None)
        self.get_folder = get_folder or (lambda: "")
        self.extension = extension
        self.clock = clock

    def build_insertion_context(self, source_path: str) -> InsertionContext:
        """Capture the source title and its current main continuation."""
        title = self.accessor.get_title(source_path)
        if not title:
            title = posixpath.basename(source_path)
            if self.extension and title.endswith(self.extension):
                title = title[: -len(self.extension)]

        next_path = self.graph.get_main_continuation(source_path)
        return InsertionContext(
            source_path=source_path,
            source_title=title,
            next_path=next_path,
            is_append=next_path is None,
        )

    def _link_to(self, target_path: str, title: str, from_path: str) -> str:
        """Return a wikilink from from_path that resolves to target_path.

        The bare title is used when it resolves back to the target;
        otherwise the link carries the vault path without extension.
        """
        try:
            resolved = self.accessor.resolve_reference(title, from_path)
        except (OSError, ValueError):
            resolved = None
        if resolved == target_path:
            return format_wikilink(title)
        qualified = target_path
        if self.extension and qualified.endswith(self.extension):
            qualified = qualified[: -len(self.extension)]
        return format_wikilink(qualified)

    def _note_path(self, folder: str, title: str) -> str:
        name = f"{title}{self.extension}"
        return normalize_path(posixpath.join(folder, name) if folder else name)

    def create_note(self, context: InsertionContext) -> CreatedNote:
        """Write an empty note linked back to the source.

        Raises:
            OSError: If the folder or note cannot be created.
        """
        folder = normalize_path(self.get_folder())
        if folder and not self.store.exists(folder):
            self.store.create_folder(folder)

        now = self.clock()
        title = generate_note_name(now)
        path = self._note_path(folder, title)
        attempts = 1
        while self.store.exists(path):
            if attempts >= MAX_NAME_ATTEMPTS:
                raise FileExistsError(f"No free note name near {title}")
            now += timedelta(milliseconds=1)
            title = generate_note_name(now)
            path = self._note_path(folder, title)
            attempts += 1

        frontmatter = serialize_frontmatter(
            {
                PREV_PROPERTY: self._link_to(context.source_path, context.source_title, path),
                MAIN_MARKER_PROPERTY: True,
            }
        )
        self.store.create(path, frontmatter + "\n")
        return CreatedNote(path=path, title=title)

    def calculate_mutations(
        self, context: InsertionContext, created: CreatedNote
    ) -> list[FrontmatterMutation]:
        """Return the rewrites needed elsewhere in the chain.

        Appends need none. A mid-chain insertion repoints the old
        continuation's prev at the new note.
        """
        if context.is_append or context.next_path is None:
            return []
        return [
            FrontmatterMutation(
                target_path=context.next_path,
                property=PREV_PROPERTY,
                value=self._link_to(created.path, created.title, context.next_path),
            )
        ]

    def apply_mutation(self, mutation: FrontmatterMutation) -> bool:
        """Apply one mutation.

        Returns:
            False if the target document does not exist, else True.
        """
        if not self.store.exists(mutation.target_path):
            logger.warning("Mutation target missing, skipped: {}", mutation.target_path)
            return False
        content = self.store.read(mutation.target_path)
        updated = upsert_property(content, mutation.property, mutation.value)
        self.store.write(mutation.target_path, updated)
        return True

    def apply_mutations(self, mutations: list[FrontmatterMutation]) -> None:
        """Apply mutations in order; earlier writes stay on failure."""
        for mutation in mutations:
            self.apply_mutation(mutation)

    def update_graph(self, context: InsertionContext, created: CreatedNote) -> None:
        """Reflect the new note and any repointed edge into the graph."""
        self.graph.set_prev(created.path, context.source_path)
        self.graph.set_main_marker(created.path, True)
        if not context.is_append and context.next_path is not None:
            self.graph.set_prev(context.next_path, created.path)
        self.graph.rebuild_next()

    def execute_insertion(self, source_path: str) -> CreatedNote:
        """Run the full insertion from a source note.

        Raises:
            OSError: Storage failures propagate; prior steps are kept.
        """
        logger.debug("[insertion] starting from {}", source_path)

        context = self.build_insertion_context(source_path)
        logger.debug("[insertion] context: {}", context)

        created = self.create_note(context)
        logger.debug("[insertion] created note: {}", created.path)

        mutations = self.calculate_mutations(context, created)
        for mutation in mutations:
            logger.debug("[insertion] mutation: {}", mutation)
        self.apply_mutations(mutations)

        self.update_graph(context, created)
        logger.debug("[insertion] graph updated")

        self.on_graph_update()
        logger.info(
            "Inserted {} after {}{}",
            created.path,
            source_path,
            "" if context.is_append else f" (before {context.next_path})",
        )
        return created


__all__ = ["ChainInsertionService", "generate_note_name", "MAX_NAME_ATTEMPTS"]
