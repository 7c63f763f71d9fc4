"""notethreads.store - Document store and metadata accessor.

Exports:
- DocumentStore: Protocol for reading/writing documents by path
- MetadataAccessor: Protocol for metadata lookup and reference resolution
- DocumentMetadata: The two properties the thread graph needs
- Vault: Folder-backed implementation of both protocols
"""

from notethreads.store.protocols import DocumentMetadata, DocumentStore, MetadataAccessor
from notethreads.store.vault import Vault

__all__ = [
    "DocumentMetadata",
    "DocumentStore",
    "MetadataAccessor",
    "Vault",
]
