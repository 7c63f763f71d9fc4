"""Tests for thread view data loading."""

import pytest

from notethreads.errors import ThreadCycleError
from notethreads.graph import ThreadGraph, build_graph
from notethreads.store import Vault
from notethreads.views import load_note_content, load_thread_data
from tests.thread_test_helpers import note_text, write_note


@pytest.fixture
def built(chain_vault):
    graph = ThreadGraph()
    build_graph(chain_vault, chain_vault, graph)
    return chain_vault, graph


class TestLoadNoteContent:
    def test_splits_frontmatter(self, built):
        vault, _ = built
        note = load_note_content(vault, "B.md")
        assert note.path == "B.md"
        assert note.frontmatter == "---\nprev: [[A]]\nthread: true\n---\n"
        assert note.body == "second\n"
        assert note.ctime > 0

    def test_missing(self, built):
        vault, _ = built
        assert load_note_content(vault, "nope.md") is None


class TestLoadThreadData:
    def test_main_chain_and_replies(self, built):
        vault, graph = built
        data = load_thread_data(graph, vault, "B.md")
        assert data.current_path == "B.md"
        assert data.main_chain.paths == ["A.md", "B.md", "C.md"]
        assert [c.paths for c in data.reply_chains] == [["D.md"]]

    def test_reply_chain_follows_main_continuations(self, built, vault_dir):
        vault, _ = built
        write_note(vault_dir, "E.md", note_text(prev="[[D]]"))
        graph = ThreadGraph()
        build_graph(vault, vault, graph)
        data = load_thread_data(graph, vault, "B.md")
        assert [c.paths for c in data.reply_chains] == [["D.md", "E.md"]]

    def test_dangling_nodes_skipped(self, vault_dir):
        write_note(vault_dir, "B.md", note_text(prev="[[Missing]]"))
        vault = Vault(vault_dir)
        graph = ThreadGraph()
        build_graph(vault, vault, graph)
        data = load_thread_data(graph, vault, "B.md")
        assert data.main_chain.paths == ["B.md"]

    def test_reply_chains_ordered_by_ctime(self, vault_dir):
        write_note(vault_dir, "R.md", "")
        write_note(vault_dir, "M.md", note_text(prev="[[R]]", thread=True))
        write_note(vault_dir, "a-late.md", note_text(prev="[[R]]"))
        write_note(vault_dir, "b-early.md", note_text(prev="[[R]]"))
        vault = Vault(vault_dir)

        class StampedVault(Vault):
            def ctime(self, path):
                return {"a-late.md": 200.0, "b-early.md": 100.0}.get(path, 1.0)

        stamped = StampedVault(vault_dir)
        graph = ThreadGraph()
        build_graph(vault, vault, graph)
        data = load_thread_data(graph, stamped, "R.md")
        assert [c.paths for c in data.reply_chains] == [["b-early.md"], ["a-late.md"]]

    def test_to_dict(self, built):
        vault, graph = built
        assert load_thread_data(graph, vault, "C.md").to_dict() == {
            "current_path": "C.md",
            "main_chain": ["A.md", "B.md", "C.md"],
            "reply_chains": [],
        }

    def test_cycle_raises(self, vault_dir):
        write_note(vault_dir, "A.md", note_text(prev="[[B]]"))
        write_note(vault_dir, "B.md", note_text(prev="[[A]]"))
        vault = Vault(vault_dir)
        graph = ThreadGraph()
        build_graph(vault, vault, graph)
        with pytest.raises(ThreadCycleError):
            load_thread_data(graph, vault, "A.md")
