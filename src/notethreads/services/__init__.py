"""notethreads.services - Multi-step operations over the store and graph."""

from notethreads.services.chain_insertion import ChainInsertionService, generate_note_name
from notethreads.services.insertion_types import (
    CreatedNote,
    FrontmatterMutation,
    InsertionContext,
)

__all__ = [
    "ChainInsertionService",
    "CreatedNote",
    "FrontmatterMutation",
    "InsertionContext",
    "generate_note_name",
]
