"""Pytest fixtures shared by notethreads tests."""

from datetime import datetime

import pytest

from tests.thread_test_helpers import FixedClock, note_text, write_note


@pytest.fixture
def vault_dir(tmp_path):
    """Empty vault directory."""
    root = tmp_path / "vault"
    root.mkdir()
    return root


@pytest.fixture
def vault(vault_dir):
    """Vault over an empty directory."""
    from notethreads.store import Vault

    return Vault(vault_dir)


@pytest.fixture
def chain_vault(vault_dir):
    """Vault with A -> B -> C as main line and D as a reply of B."""
    from notethreads.store import Vault

    write_note(vault_dir, "A.md", note_text(body="first\n"))
    write_note(vault_dir, "B.md", note_text(prev="[[A]]", thread=True, body="second\n"))
    write_note(vault_dir, "C.md", note_text(prev="[[B]]", thread=True, body="third\n"))
    write_note(vault_dir, "D.md", note_text(prev="[[B]]", body="reply\n"))
    return Vault(vault_dir)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2026-03-14 09:26:53.589."""
    return FixedClock(datetime(2026, 3, 14, 9, 26, 53, 589000))
