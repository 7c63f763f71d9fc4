"""Configuration loading for .notethreads.toml files.

Priority, highest first: environment overrides, the config file,
DEFAULT_CONFIG.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from notethreads.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX
from notethreads.errors import ConfigError


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Walk up from start_path looking for .notethreads.toml.

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start_path or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def parse_toml(content: str, source: str = "<string>") -> dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        return tomlkit.parse(content).unwrap()
    except ParseError as e:
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file merged over the defaults."""
    config_path = Path(config_path)
    user = parse_toml(config_path.read_text(encoding="utf-8"), str(config_path))
    return merge_configs(DEFAULT_CONFIG, user)


def _try_parse_env_value(raw: str) -> Any:
    """Parse an env var value: JSON list/object, bool, int, else string."""
    stripped = raw.strip()
    if stripped[:1] in ("[", "{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return raw
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(stripped)
    except ValueError:
        return raw


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply NOTETHREADS_<SECTION>_<KEY> overrides to known sections.

    The section is the longest known section name matching the prefix,
    so keys containing underscores (e.g. TRIGGER_DEBOUNCE_MS) work.
    """
    sections = sorted(config.keys(), key=len, reverse=True)
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        rest = name[len(ENV_PREFIX) :].lower()
        for section in sections:
            if rest.startswith(section + "_") and isinstance(config.get(section), dict):
                key = rest[len(section) + 1 :]
                if key:
                    config[section][key] = _try_parse_env_value(raw)
                break
    return config


def get_config(
    config_path: Path | None = None,
    start_path: Path | None = None,
) -> dict[str, Any]:
    """Resolve configuration for a command.

    Uses config_path if given, otherwise discovers a config file from
    start_path. A relative [vault] root is anchored at the config file's
    directory.
    """
    if config_path is None:
        config_path = find_config_file(start_path)

    if config_path is not None:
        config = load_config(config_path)
        root = Path(config["vault"].get("root", "."))
        if not root.is_absolute():
            config["vault"]["root"] = str((Path(config_path).parent / root).resolve())
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    return _apply_env_overrides(config)


@dataclass
class ThreadsConfig:
    """Typed view of the configuration dict.

    Attributes:
        vault_root: Vault directory.
        extension: Document extension.
        skip_dirs: Directory names excluded from scans.
        folder: Folder for inserted notes ("" = vault root).
        threshold: Trailing blank lines that trigger an insertion.
        debounce_ms: Edit debounce for the trigger detector.
        log_level: loguru level name.
    """

    vault_root: str = "."
    extension: str = ".md"
    skip_dirs: list[str] = field(default_factory=lambda: [".obsidian", ".trash", ".git"])
    folder: str = ""
    threshold: int = 5
    debounce_ms: int = 300
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThreadsConfig:
        vault = data.get("vault", {})
        insertion = data.get("insertion", {})
        trigger = data.get("trigger", {})
        logging_section = data.get("logging", {})
        return cls(
            vault_root=str(vault.get("root", ".")),
            extension=vault.get("extension", ".md"),
            skip_dirs=list(vault.get("skip_dirs", [".obsidian", ".trash", ".git"])),
            folder=insertion.get("folder", ""),
            threshold=int(trigger.get("threshold", 5)),
            debounce_ms=int(trigger.get("debounce_ms", 300)),
            log_level=str(logging_section.get("level", "INFO")).upper(),
        )
