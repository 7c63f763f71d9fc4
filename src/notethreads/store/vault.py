"""Vault - Folder-backed document store.

Documents are addressed by POSIX paths relative to the vault root
(e.g. ``threads/20260101-120000-000.md``). Every read and write uses
``encoding="utf-8"`` explicitly.
"""

from __future__ import annotations

import posixpath
from pathlib import Path, PurePosixPath
from typing import Any

from loguru import logger

from notethreads.store.protocols import DocumentMetadata
from notethreads.utilities.frontmatter import (
    MAIN_MARKER_PROPERTY,
    PREV_PROPERTY,
    parse_frontmatter,
)

DEFAULT_SKIP_DIRS = [".obsidian", ".trash", ".git"]


def normalize_path(path: str) -> str:
    """Normalize a vault path: forward slashes, no leading ./ or /."""
    cleaned = path.replace("\\", "/").strip()
    cleaned = posixpath.normpath(cleaned) if cleaned else ""
    if cleaned in (".", ""):
        return ""
    return cleaned.lstrip("/")


class Vault:
    """A directory of markdown documents.

    Implements both DocumentStore and MetadataAccessor.

    Args:
        root: Vault directory.
        extension: Document extension, including the dot.
        skip_dirs: Directory names excluded from list_all().
    """

    def __init__(
        self,
        root: Path | str,
        extension: str = ".md",
        skip_dirs: list[str] | None = None,
    ) -> None:
        self.root = Path(root)
        self.extension = extension
        self.skip_dirs = list(DEFAULT_SKIP_DIRS if skip_dirs is None else skip_dirs)
        # basename -> paths; refreshed by list_all(), dropped on create()
        self._name_index: dict[str, list[str]] | None = None

    @classmethod
    def from_config(cls, config: dict[str, Any], root: Path | str | None = None) -> Vault:
        """Create a Vault from the [vault] config section."""
        section = config.get("vault", {})
        return cls(
            root=root if root is not None else section.get("root", "."),
            extension=section.get("extension", ".md"),
            skip_dirs=section.get("skip_dirs"),
        )

    def _abs(self, path: str) -> Path:
        rel = normalize_path(path)
        if rel.startswith("../"):
            raise ValueError(f"Path escapes vault: {path}")
        return self.root / rel

    # ─────────────────────────────────────────────────────────────────────────
    # DocumentStore
    # ─────────────────────────────────────────────────────────────────────────

    def read(self, path: str) -> str:
        return self._abs(path).read_text(encoding="utf-8")

    def write(self, path: str, text: str) -> None:
        """Overwrite an existing document.

        Raises:
            FileNotFoundError: If the document does not exist.
        """
        target = self._abs(path)
        if not target.is_file():
            raise FileNotFoundError(f"No such document: {path}")
        target.write_text(text, encoding="utf-8")

    def create(self, path: str, text: str) -> None:
        """Create a new document.

        Raises:
            FileExistsError: If a document already exists at path.
            FileNotFoundError: If the parent folder is missing.
        """
        target = self._abs(path)
        with target.open("x", encoding="utf-8") as fh:
            fh.write(text)
        self._name_index = None

    def exists(self, path: str) -> bool:
        return self._abs(path).exists()

    def _is_document(self, path: str) -> bool:
        # Names the OS rejects (e.g. too long) are not documents
        try:
            return self._abs(path).is_file()
        except OSError:
            return False

    def list_all(self) -> list[str]:
        """List all documents, sorted, skipping configured directories."""
        if not self.root.is_dir():
            return []
        paths = []
        for file_path in self.root.rglob(f"*{self.extension}"):
            if not file_path.is_file():
                continue
            rel = file_path.relative_to(self.root)
            if any(part in self.skip_dirs for part in rel.parts[:-1]):
                continue
            paths.append(rel.as_posix())
        paths.sort()
        index: dict[str, list[str]] = {}
        for p in paths:
            index.setdefault(posixpath.basename(p), []).append(p)
        self._name_index = index
        return paths

    def _names(self) -> dict[str, list[str]]:
        if self._name_index is None:
            self.list_all()
        return self._name_index or {}

    def create_folder(self, path: str) -> None:
        self._abs(path).mkdir(parents=True, exist_ok=True)

    def ctime(self, path: str) -> float:
        """Return the document's creation (or metadata change) time."""
        stat = self._abs(path).stat()
        return getattr(stat, "st_birthtime", stat.st_ctime)

    # ─────────────────────────────────────────────────────────────────────────
    # MetadataAccessor
    # ─────────────────────────────────────────────────────────────────────────

    def get_metadata(self, path: str) -> DocumentMetadata:
        """Read prev and the main-thread marker from a document.

        Raises:
            OSError: If the document cannot be read.
        """
        properties = parse_frontmatter(self.read(path))
        prev = properties.get(PREV_PROPERTY)
        if not isinstance(prev, (str, list)):
            prev = None
        return DocumentMetadata(
            prev=prev,
            is_main_thread=properties.get(MAIN_MARKER_PROPERTY) is True,
        )

    def get_title(self, path: str) -> str | None:
        """Return the display title (basename without extension)."""
        if not self._abs(path).is_file():
            return None
        return self.strip_extension(PurePosixPath(normalize_path(path)).name)

    def strip_extension(self, name: str) -> str:
        if self.extension and name.endswith(self.extension):
            return name[: -len(self.extension)]
        return name

    def resolve_reference(self, text: str, from_path: str) -> str | None:
        """Resolve a bare reference to an existing document path.

        Exact vault paths win, with or without the extension. Otherwise
        documents whose path ends with the reference (matched on whole
        path segments) are candidates; ties prefer the referencing
        document's folder, then the shortest path.
        """
        ref = normalize_path(text)
        if not ref or ref.startswith("../"):
            return None
        for candidate in (ref, ref + self.extension):
            if candidate.endswith(self.extension) and self._is_document(candidate):
                return candidate

        suffix = ref if ref.endswith(self.extension) else ref + self.extension
        name = posixpath.basename(suffix)
        matches = [
            p
            for p in self._names().get(name, [])
            if p == suffix or p.endswith("/" + suffix)
        ]
        if not matches:
            logger.debug("Unresolved reference {!r} from {}", text, from_path)
            return None

        source_dir = posixpath.dirname(normalize_path(from_path))
        matches.sort(key=lambda p: (posixpath.dirname(p) != source_dir, len(p), p))
        return matches[0]


__all__ = ["Vault", "normalize_path", "DEFAULT_SKIP_DIRS"]
