"""Exception types shared across notethreads."""

from __future__ import annotations


class NoteThreadsError(Exception):
    """Base class for notethreads errors."""


class ThreadCycleError(NoteThreadsError):
    """Raised when a thread walk revisits a node.

    Attributes:
        start: The node the walk started from.
        cycle: Nodes visited before the repeat, in walk order.
        direction: "backward" (prev edges) or "forward" (main continuations).
    """

    def __init__(self, start: str, cycle: list[str], direction: str) -> None:
        self.start = start
        self.cycle = list(cycle)
        self.direction = direction
        path = " -> ".join(self.cycle)
        super().__init__(f"Cycle detected walking {direction} from {start}: {path}")


class ConfigError(NoteThreadsError):
    """Raised when a configuration file cannot be parsed."""
