"""notethreads.observers - Editor-side trigger detection."""

from notethreads.observers.empty_lines import (
    EmptyLineObserver,
    count_empty_lines_at_end,
    trim_trailing_empty_lines,
)

__all__ = ["EmptyLineObserver", "count_empty_lines_at_end", "trim_trailing_empty_lines"]
