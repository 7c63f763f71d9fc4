"""Default configuration values."""

from __future__ import annotations

from typing import Any

CONFIG_FILENAME = ".notethreads.toml"
ENV_PREFIX = "NOTETHREADS_"

DEFAULT_CONFIG: dict[str, Any] = {
    "vault": {
        "root": ".",
        "extension": ".md",
        "skip_dirs": [".obsidian", ".trash", ".git"],
    },
    "insertion": {
        # "" places new notes at the vault root
        "folder": "",
    },
    "trigger": {
        "threshold": 5,
        "debounce_ms": 300,
    },
    "logging": {
        "level": "INFO",
    },
}
