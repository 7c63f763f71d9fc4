"""notethreads.views - Thread data assembled for display."""

from notethreads.views.thread_data import (
    NoteContent,
    ThreadChain,
    ThreadData,
    load_note_content,
    load_thread_data,
)

__all__ = ["NoteContent", "ThreadChain", "ThreadData", "load_note_content", "load_thread_data"]
