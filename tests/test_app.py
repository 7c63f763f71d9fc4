"""Tests for ThreadsApp orchestration."""

from __future__ import annotations

import threading

import pytest

from notethreads.app import ThreadsApp
from notethreads.config import ThreadsConfig
from tests.thread_test_helpers import note_text, write_note

NOTE_NAME = "20260314-092653-589"


class TestRebuild:
    """Tests for graph rebuilds."""

    def test_rebuild_builds_graph(self, chain_vault):
        app = ThreadsApp(chain_vault)

        result = app.rebuild()

        assert result.node_count == 4
        assert app.last_build is result
        assert app.graph.get_full_thread("B.md") == ["A.md", "B.md", "C.md"]

    def test_rebuild_notifies_listeners(self, chain_vault):
        calls = []
        app = ThreadsApp(chain_vault, on_update=lambda: calls.append("init"))
        app.add_listener(lambda: calls.append("added"))

        app.rebuild()

        assert calls == ["init", "added"]

    def test_rebuild_picks_up_store_changes(self, chain_vault, vault_dir):
        app = ThreadsApp(chain_vault)
        app.rebuild()

        write_note(vault_dir, "E.md", note_text(prev="[[C]]", thread=True))
        app.rebuild()

        assert app.graph.get_main_continuation("C.md") == "E.md"


class TestInsertion:
    """Tests for insertion through the app."""

    def test_insert_after_notifies(self, chain_vault, fixed_clock):
        calls = []
        app = ThreadsApp(chain_vault, clock=fixed_clock)
        app.rebuild()
        app.add_listener(lambda: calls.append(1))

        created = app.insert_after("C.md")

        assert created.path == f"{NOTE_NAME}.md"
        assert calls == [1]
        assert app.graph.get_full_thread("A.md") == ["A.md", "B.md", "C.md", f"{NOTE_NAME}.md"]

    def test_insert_uses_configured_folder(self, chain_vault, fixed_clock):
        app = ThreadsApp(chain_vault, ThreadsConfig(folder="threads"), clock=fixed_clock)
        app.rebuild()

        created = app.insert_after("A.md")

        assert created.path == f"threads/{NOTE_NAME}.md"
        assert chain_vault.exists(created.path)

    def test_handle_trigger_success(self, chain_vault, fixed_clock):
        app = ThreadsApp(chain_vault, clock=fixed_clock)
        app.rebuild()

        created = app.handle_trigger(None, "B.md")

        assert created is not None
        assert app.graph.get_prev("C.md") == created.path

    def test_handle_trigger_failure_returns_none(self, chain_vault, monkeypatch):
        app = ThreadsApp(chain_vault)
        app.rebuild()
        calls = []
        app.add_listener(lambda: calls.append(1))

        def fail(context):
            raise OSError("disk full")

        monkeypatch.setattr(app.insertion, "create_note", fail)

        assert app.handle_trigger(None, "B.md") is None
        assert calls == []
        assert app.graph.get_main_continuation("B.md") == "C.md"

    def test_insert_after_propagates_errors(self, chain_vault, monkeypatch):
        app = ThreadsApp(chain_vault)
        app.rebuild()

        def fail(context):
            raise OSError("disk full")

        monkeypatch.setattr(app.insertion, "create_note", fail)

        with pytest.raises(OSError, match="disk full"):
            app.insert_after("B.md")


class TestObserverWiring:
    """Tests for create_observer."""

    def test_observer_uses_config(self, chain_vault):
        app = ThreadsApp(chain_vault, ThreadsConfig(threshold=3, debounce_ms=0))

        observer = app.create_observer()

        assert observer.threshold == 3
        assert observer.debounce_ms == 0

    def test_observer_triggers_insertion(self, chain_vault, fixed_clock):
        app = ThreadsApp(chain_vault, ThreadsConfig(threshold=2, debounce_ms=0), clock=fixed_clock)
        app.rebuild()
        observer = app.create_observer()

        observer.on_change("third\n\n\n", "C.md")

        assert app.graph.get_main_continuation("C.md") == f"{NOTE_NAME}.md"

    def test_observer_kwargs_override_config(self, chain_vault):
        app = ThreadsApp(chain_vault, ThreadsConfig(threshold=3))

        observer = app.create_observer(threshold=7)

        assert observer.threshold == 7


class TestThreadData:
    """Tests for view data through the app."""

    def test_thread_data(self, chain_vault):
        app = ThreadsApp(chain_vault)
        app.rebuild()

        data = app.thread_data("B.md")

        assert data.main_chain.paths == ["A.md", "B.md", "C.md"]
        assert [c.paths for c in data.reply_chains] == [["D.md"]]

    def test_from_config(self, chain_vault, vault_dir):
        from notethreads.config import DEFAULT_CONFIG, merge_configs

        config = merge_configs(DEFAULT_CONFIG, {"vault": {"root": str(vault_dir)}})
        app = ThreadsApp.from_config(config)
        app.rebuild()

        assert len(app.graph) == 4


class TestSerialization:
    """Graph mutations from timer threads and callers do not interleave."""

    def test_rebuild_waits_for_trigger_insertion(self, chain_vault, fixed_clock, monkeypatch):
        app = ThreadsApp(chain_vault, clock=fixed_clock)
        app.rebuild()
        events = []
        app.add_listener(lambda: events.append(threading.current_thread().name))

        entered = threading.Event()
        release = threading.Event()
        create_note = app.insertion.create_note

        def slow_create(context):
            entered.set()
            release.wait(5)
            return create_note(context)

        monkeypatch.setattr(app.insertion, "create_note", slow_create)

        inserter = threading.Thread(target=app.handle_trigger, args=(None, "C.md"), name="trigger")
        inserter.start()
        assert entered.wait(5)

        rebuilder = threading.Thread(target=app.rebuild, name="rebuild")
        rebuilder.start()
        rebuilder.join(0.2)
        assert rebuilder.is_alive()
        assert events == []

        release.set()
        inserter.join(5)
        rebuilder.join(5)

        assert events == ["trigger", "rebuild"]
        assert app.graph.get_main_continuation("C.md") == f"{NOTE_NAME}.md"

    def test_debounced_trigger_inserts(self, chain_vault, fixed_clock):
        app = ThreadsApp(chain_vault, ThreadsConfig(threshold=3, debounce_ms=10), clock=fixed_clock)
        app.rebuild()
        done = threading.Event()
        app.add_listener(done.set)
        observer = app.create_observer()

        observer.on_change("third\n\n\n\n", "C.md")

        assert done.wait(5)
        observer.cancel()
        with app._lock:
            assert app.graph.get_main_continuation("C.md") == f"{NOTE_NAME}.md"
