"""Helpers shared by CLI commands."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from notethreads.log_config import configure_logging
from notethreads.store.vault import normalize_path


def resolve_config(args: argparse.Namespace) -> dict[str, Any]:
    """Load configuration, applying the --vault override."""
    from notethreads.config import get_config

    config = get_config(getattr(args, "config", None))
    vault_dir = getattr(args, "vault", None)
    if vault_dir is not None:
        config["vault"]["root"] = str(Path(vault_dir).resolve())

    verbose = getattr(args, "verbose", False)
    quiet = getattr(args, "quiet", False)
    if not (verbose or quiet):
        configure_logging(config.get("logging", {}).get("level", "INFO"))
    return config


def load_app(args: argparse.Namespace):
    """Build a ThreadsApp with a freshly built graph."""
    from notethreads.app import ThreadsApp

    app = ThreadsApp.from_config(resolve_config(args))
    app.rebuild()
    return app


def vault_path(app, path: str) -> str:
    """Turn a CLI path argument into a vault-relative document path.

    Accepts vault-relative paths, filesystem paths inside the vault,
    and paths without the extension.
    """
    candidate = Path(path)
    if candidate.is_absolute() or candidate.exists():
        try:
            path = candidate.resolve().relative_to(app.vault.root.resolve()).as_posix()
        except ValueError:
            pass
    rel = normalize_path(path)
    if not rel.endswith(app.vault.extension) and not app.vault.exists(rel):
        rel = rel + app.vault.extension
    return rel
