"""
notethreads - Threads of linked markdown notes

Notes form chains through a ``prev`` property in their metadata block.
notethreads builds the thread graph from a folder of notes, walks main
lines and replies, and splices new notes into existing chains.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("notethreads")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from notethreads.errors import ConfigError, NoteThreadsError, ThreadCycleError
from notethreads.graph import BrokenReference, GraphBuildResult, ThreadGraph, build_graph
from notethreads.services import (
    ChainInsertionService,
    CreatedNote,
    FrontmatterMutation,
    InsertionContext,
)
from notethreads.store import DocumentMetadata, Vault

__all__ = [
    "__version__",
    "BrokenReference",
    "ChainInsertionService",
    "ConfigError",
    "CreatedNote",
    "DocumentMetadata",
    "FrontmatterMutation",
    "GraphBuildResult",
    "InsertionContext",
    "NoteThreadsError",
    "ThreadCycleError",
    "ThreadGraph",
    "Vault",
    "build_graph",
]
