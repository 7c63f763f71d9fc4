"""EmptyLineObserver - Detects a run of blank lines at the end of a note.

When the run reaches the threshold the observer fires once, then stays
quiet until the run drops below the threshold again.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

from loguru import logger

DEFAULT_THRESHOLD = 5
DEFAULT_DEBOUNCE_MS = 300

TriggerCallback = Callable[[Any, str], None]


def count_empty_lines_at_end(content: str) -> int:
    """Count newlines in the trailing whitespace-only tail of a document.

    Spaces and tabs on blank lines are ignored; ``\\r\\n`` counts once.
    """
    count = 0
    for ch in reversed(content):
        if ch == "\n":
            count += 1
        elif ch in " \t\r":
            continue
        else:
            break
    return count


def trim_trailing_empty_lines(content: str) -> str:
    """Collapse the blank tail of a document to a single newline."""
    stripped = content.rstrip(" \t\r\n")
    if stripped == content:
        return content
    return stripped + "\n"


class EmptyLineObserver:
    """Debounced trailing-blank-line detector.

    Args:
        on_trigger: Called with (editor, file_path) when the threshold is hit.
        threshold: Blank lines needed to trigger.
        debounce_ms: Quiet period before a change is checked; 0 checks at once.
        cleanup: Passed the trimmed content after a trigger, so the editor
            can drop the extra blank lines.
    """

    def __init__(
        self,
        on_trigger: TriggerCallback,
        threshold: int = DEFAULT_THRESHOLD,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        cleanup: Callable[[Any, str], None] | None = None,
    ) -> None:
        if threshold < 1:
            raise ValueError(f"threshold must be at least 1, got {threshold}")
        self.on_trigger = on_trigger
        self.threshold = threshold
        self.debounce_ms = debounce_ms
        self.cleanup = cleanup
        self.triggered = False
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def check_trigger(self, content: str, file_path: str | None, editor: Any = None) -> bool:
        """Check the content now.

        Returns:
            True if this call fired the trigger.
        """
        empty_lines = count_empty_lines_at_end(content)
        # Debounced checks run on timer threads; decide and latch atomically
        with self._lock:
            if empty_lines < self.threshold:
                self.triggered = False
                return False
            if self.triggered or not file_path:
                return False
            self.triggered = True

        logger.debug("[observer] trigger detected in {}, empty lines: {}", file_path, empty_lines)
        if self.cleanup is not None:
            self.cleanup(editor, trim_trailing_empty_lines(content))
        self.on_trigger(editor, file_path)
        return True

    def on_change(self, content: str, file_path: str | None, editor: Any = None) -> None:
        """Record an edit; the check runs after the debounce period."""
        if self.debounce_ms <= 0:
            self.check_trigger(content, file_path, editor)
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(
                self.debounce_ms / 1000.0,
                self.check_trigger,
                args=(content, file_path, editor),
            )
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        """Drop any pending debounced check."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


__all__ = [
    "EmptyLineObserver",
    "count_empty_lines_at_end",
    "trim_trailing_empty_lines",
    "DEFAULT_THRESHOLD",
    "DEFAULT_DEBOUNCE_MS",
]
