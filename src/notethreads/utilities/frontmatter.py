"""Frontmatter I/O - read and rewrite the leading metadata block of a note.

A metadata block is delimited by ``---`` lines at the very start of the
file and holds ``key: value`` lines. List values use either inline
``[a, b]`` syntax or indented ``- item`` continuation lines. References
use wikilink syntax, ``[[Target]]`` or ``[[Target|alias]]``.

Public API
----------
- ``split_frontmatter``    : separate the block from the body
- ``parse_frontmatter``    : block text to an ordered dict
- ``serialize_frontmatter``: dict to block text
- ``upsert_property``      : set one property in a full document
- ``format_wikilink`` / ``clean_wikilink``
"""

from __future__ import annotations

import re
from typing import Any

PREV_PROPERTY = "prev"
MAIN_MARKER_PROPERTY = "thread"

FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(?:---|([\s\S]*?)\r?\n---)[ \t]*(?:\r?\n|\Z)")
_KEY_RE = re.compile(r"^([^\s:#-][^:]*):(?:\s+(.*)|\s*)$")
_LIST_ITEM_RE = re.compile(r"^\s*-(?:\s+(.*))?$")
_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


def split_frontmatter(content: str) -> tuple[str, str]:
    """Split a document into its metadata block and body.

    Returns:
        (block, body) where block includes the delimiters and trailing
        newline, or ("", content) if the document has no block.
    """
    match = FRONTMATTER_RE.match(content)
    if not match:
        return "", content
    return match.group(0), content[match.end() :]


def _unquote(raw: str) -> str:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ("'", '"'):
        return raw[1:-1]
    return raw


def is_wikilink(value: str) -> bool:
    return value.startswith("[[") and value.endswith("]]")


def _parse_scalar(raw: str) -> Any:
    """Convert a raw value string to a Python value."""
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ("'", '"'):
        return raw[1:-1]
    if is_wikilink(raw):
        return raw
    if raw.startswith("[") and raw.endswith("]"):
        items = [_unquote(item.strip()) for item in raw[1:-1].split(",")]
        return [item for item in items if item]
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered in ("null", "~"):
        return None
    if _NUMBER_RE.match(raw):
        return float(raw) if "." in raw else int(raw)
    return raw


def parse_frontmatter(content: str) -> dict[str, Any]:
    """Parse the metadata block of a document (or a bare block).

    Never raises: a missing or unreadable block yields an empty dict.
    Lines that are neither ``key: value`` nor list continuations are
    ignored.

    Args:
        content: Full document text, or a block with its delimiters.

    Returns:
        Properties in file order.
    """
    match = FRONTMATTER_RE.match(content)
    if not match:
        return {}
    inner = match.group(1) or ""

    properties: dict[str, Any] = {}
    list_key: str | None = None
    items: list[str] = []

    def flush() -> None:
        if list_key is not None:
            properties[list_key] = items if items else None

    for line in inner.splitlines():
        if list_key is not None:
            item_match = _LIST_ITEM_RE.match(line)
            if item_match:
                item = _unquote((item_match.group(1) or "").strip())
                if item:
                    items.append(item)
                continue
            flush()
            list_key = None
            items = []

        key_match = _KEY_RE.match(line)
        if not key_match:
            continue
        key = key_match.group(1).strip()
        raw = (key_match.group(2) or "").strip()
        if raw == "":
            list_key = key
            continue
        properties[key] = _parse_scalar(raw)

    flush()
    return properties


def _needs_quotes(value: str) -> bool:
    if is_wikilink(value):
        return False
    if value == "" or value.lower() in ("true", "false", "null", "~"):
        return True
    if _NUMBER_RE.match(value):
        return True
    if re.match(r"^[\[\]{}>|*&!%#@`'\"]", value):
        return True
    return ": " in value or " #" in value


def serialize_value(value: Any) -> str:
    """Render a value as it appears after ``key:``.

    Lists render as continuation lines (leading newline included).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        return "".join(f"\n  - {serialize_value(item)}" for item in value)
    text = str(value)
    if _needs_quotes(text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def _property_lines(key: str, value: Any) -> str:
    rendered = serialize_value(value)
    if rendered.startswith("\n") or rendered == "":
        return f"{key}:{rendered}"
    return f"{key}: {rendered}"


def serialize_frontmatter(properties: dict[str, Any]) -> str:
    """Render properties as a complete metadata block.

    Returns:
        ``---\\n...\\n---\\n``, or "" when there are no properties.
    """
    if not properties:
        return ""
    lines = [_property_lines(key, value) for key, value in properties.items()]
    return "---\n" + "\n".join(lines) + "\n---\n"


def upsert_property(content: str, key: str, value: Any) -> str:
    """Set one property in a document, keeping everything else intact.

    The property's existing line and any indented continuation lines
    are replaced in place. A missing property is appended to the block,
    and a document without a block gets a new one.

    Args:
        content: Full document text.
        key: Property name.
        value: New value (str, bool, number, list or None).

    Returns:
        The rewritten document text.
    """
    new_line = _property_lines(key, value)
    match = FRONTMATTER_RE.match(content)
    if not match:
        return serialize_frontmatter({key: value}) + content

    body = content[match.end() :]
    lines = (match.group(1) or "").splitlines()

    out: list[str] = []
    replaced = False
    skipping = False
    for line in lines:
        if skipping:
            if _LIST_ITEM_RE.match(line) or (line.startswith((" ", "\t")) and line.strip()):
                continue
            skipping = False
        key_match = _KEY_RE.match(line)
        if key_match and key_match.group(1).strip() == key:
            if not replaced:
                out.append(new_line)
                replaced = True
            skipping = True
            continue
        out.append(line)

    if not replaced:
        out.append(new_line)

    return "---\n" + "\n".join(out) + "\n---\n" + body


def format_wikilink(title: str) -> str:
    return f"[[{title}]]"


def clean_wikilink(link: str) -> str:
    """Strip wikilink decoration to get a bare reference.

    ``[[Note]]`` -> ``Note``, ``[[dir/Note|alias]]`` -> ``dir/Note``,
    plain text passes through trimmed.
    """
    cleaned = link.strip()
    if cleaned.startswith("[["):
        cleaned = cleaned[2:]
    if cleaned.endswith("]]"):
        cleaned = cleaned[:-2]
    pipe = cleaned.find("|")
    if pipe != -1:
        cleaned = cleaned[:pipe]
    return cleaned.strip()


__all__ = [
    "MAIN_MARKER_PROPERTY",
    "PREV_PROPERTY",
    "clean_wikilink",
    "format_wikilink",
    "is_wikilink",
    "parse_frontmatter",
    "serialize_frontmatter",
    "serialize_value",
    "split_frontmatter",
    "upsert_property",
]
