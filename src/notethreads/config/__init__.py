"""
notethreads.config - Configuration loading and defaults
"""

from notethreads.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from notethreads.config.loader import (
    ThreadsConfig,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "ThreadsConfig",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
]
