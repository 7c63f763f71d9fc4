"""notethreads.utilities - Text helpers shared by the store and services."""
