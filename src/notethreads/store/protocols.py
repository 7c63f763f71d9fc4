"""Collaborator protocols for the document store.

The thread graph never touches files directly. Everything it needs
from storage goes through these two protocols.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Union, runtime_checkable

PrevValue = Union[str, Sequence[str], None]


@dataclass(frozen=True)
class DocumentMetadata:
    """Thread-related metadata of one document.

    Attributes:
        prev: Raw prev reference: a single string, a list of strings, or None.
        is_main_thread: Whether the document is marked as a main continuation.
    """

    prev: PrevValue = None
    is_main_thread: bool = False


@runtime_checkable
class DocumentStore(Protocol):
    """A collection of text documents addressed by unique path."""

    def read(self, path: str) -> str:
        ...

    def write(self, path: str, text: str) -> None:
        ...

    def create(self, path: str, text: str) -> None:
        ...

    def exists(self, path: str) -> bool:
        ...

    def list_all(self) -> list[str]:
        ...

    def create_folder(self, path: str) -> None:
        ...


@runtime_checkable
class MetadataAccessor(Protocol):
    """Metadata lookup and reference resolution over a document store."""

    def get_metadata(self, path: str) -> DocumentMetadata:
        ...

    def resolve_reference(self, text: str, from_path: str) -> str | None:
        ...

    def get_title(self, path: str) -> str | None:
        ...
