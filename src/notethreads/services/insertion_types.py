"""Value types passed between the steps of a chain insertion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class InsertionContext:
    """State captured when an insertion is triggered.

    Attributes:
        source_path: Document the insertion starts from.
        source_title: Title used in the new note's prev link.
        next_path: Current main continuation of the source, if any.
        is_append: True when the source ends its chain.
    """

    source_path: str
    source_title: str
    next_path: str | None
    is_append: bool


@dataclass(frozen=True)
class CreatedNote:
    """A note written by the insertion."""

    path: str
    title: str


@dataclass(frozen=True)
class FrontmatterMutation:
    """One property rewrite in another document.

    Attributes:
        target_path: Document to modify.
        property: Property name to upsert.
        value: New value.
    """

    target_path: str
    property: str
    value: Any

    def __str__(self) -> str:
        return f"{self.target_path}: {self.property} := {self.value!r}"


__all__ = ["InsertionContext", "CreatedNote", "FrontmatterMutation"]
