"""ThreadsApp - Owns the thread graph and wires its collaborators.

There is exactly one ThreadGraph per app. Only rebuild() and the
insertion service mutate it, and both notify listeners afterwards.
Debounced triggers arrive on timer threads, so every entry point that
touches the graph holds the app lock.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

from loguru import logger

from notethreads.config import ThreadsConfig
from notethreads.graph.builder import build_graph
from notethreads.graph.references import GraphBuildResult
from notethreads.graph.thread_graph import ThreadGraph
from notethreads.observers.empty_lines import EmptyLineObserver
from notethreads.services.chain_insertion import ChainInsertionService
from notethreads.services.insertion_types import CreatedNote
from notethreads.store.vault import Vault
from notethreads.views.thread_data import ThreadData, load_thread_data


class ThreadsApp:
    """Orchestrator for one vault.

    Args:
        vault: The document store.
        config: Typed configuration.
        on_update: Called after every rebuild and every completed insertion.
    """

    def __init__(
        self,
        vault: Vault,
        config: ThreadsConfig | None = None,
        on_update: Callable[[], None] | None = None,
        **service_kwargs: Any,
    ) -> None:
        self.vault = vault
        self.config = config or ThreadsConfig()
        self.graph = ThreadGraph()
        self._listeners: list[Callable[[], None]] = []
        if on_update is not None:
            self._listeners.append(on_update)
        self.last_build: GraphBuildResult | None = None
        # Reentrant: listeners may call back into the app while notified
        self._lock = threading.RLock()

        self.insertion = ChainInsertionService(
            store=vault,
            accessor=vault,
            graph=self.graph,
            on_graph_update=self.notify,
            get_folder=lambda: self.config.folder,
            extension=vault.extension,
            **service_kwargs,
        )

    @classmethod
    def from_config(cls, config: dict[str, Any], **kwargs: Any) -> ThreadsApp:
        return cls(Vault.from_config(config), ThreadsConfig.from_dict(config), **kwargs)

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    def rebuild(self) -> GraphBuildResult:
        """Rebuild the graph from the vault and notify listeners."""
        with self._lock:
            self.last_build = build_graph(
                self.vault, self.vault, self.graph, extension=self.vault.extension
            )
            self.notify()
            return self.last_build

    def insert_after(self, path: str) -> CreatedNote:
        """Insert a note after path. Errors propagate."""
        with self._lock:
            return self.insertion.execute_insertion(path)

    def handle_trigger(self, editor: Any, file_path: str) -> CreatedNote | None:
        """Trigger-detector entry point.

        May run on the observer's timer thread; it waits for any rebuild
        or insertion in progress. A failed insertion is reported once and
        returns None; the graph keeps whatever state the failure left
        until the next rebuild.
        """
        with self._lock:
            try:
                return self.insertion.execute_insertion(file_path)
            except Exception:
                logger.exception("Chain insertion from {} failed", file_path)
                return None

    def create_observer(self, **kwargs: Any) -> EmptyLineObserver:
        """Create a trigger detector wired to handle_trigger."""
        kwargs.setdefault("threshold", self.config.threshold)
        kwargs.setdefault("debounce_ms", self.config.debounce_ms)
        return EmptyLineObserver(on_trigger=self.handle_trigger, **kwargs)

    def thread_data(self, path: str) -> ThreadData:
        with self._lock:
            return load_thread_data(self.graph, self.vault, path)


__all__ = ["ThreadsApp"]
