"""
notethreads.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "graph_cmd",
    "insert",
    "show",
]
