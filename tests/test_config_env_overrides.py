"""Tests for environment variable overrides in config."""

from __future__ import annotations


class TestTryParseEnvValue:
    """_try_parse_env_value parses typed values."""

    def test_json_list_parsed(self):
        from notethreads.config import _try_parse_env_value

        assert _try_parse_env_value('["archive", "templates"]') == ["archive", "templates"]

    def test_json_object_parsed(self):
        from notethreads.config import _try_parse_env_value

        assert _try_parse_env_value('{"key": "value"}') == {"key": "value"}

    def test_boolean_parsed(self):
        from notethreads.config import _try_parse_env_value

        assert _try_parse_env_value("true") is True
        assert _try_parse_env_value("FALSE") is False

    def test_integer_parsed(self):
        from notethreads.config import _try_parse_env_value

        assert _try_parse_env_value("7") == 7

    def test_plain_string_passthrough(self):
        from notethreads.config import _try_parse_env_value

        assert _try_parse_env_value("threads") == "threads"

    def test_malformed_json_returns_string(self):
        from notethreads.config import _try_parse_env_value

        assert _try_parse_env_value("[not valid json") == "[not valid json"


class TestApplyEnvOverrides:
    """_apply_env_overrides maps NOTETHREADS_<SECTION>_<KEY> into config."""

    def test_env_var_sets_value(self, monkeypatch):
        from notethreads.config import _apply_env_overrides

        monkeypatch.setenv("NOTETHREADS_INSERTION_FOLDER", "threads")
        config = _apply_env_overrides({"insertion": {"folder": ""}})
        assert config["insertion"]["folder"] == "threads"

    def test_key_with_underscore(self, monkeypatch):
        from notethreads.config import _apply_env_overrides

        monkeypatch.setenv("NOTETHREADS_TRIGGER_DEBOUNCE_MS", "50")
        config = _apply_env_overrides({"trigger": {"debounce_ms": 300}})
        assert config["trigger"]["debounce_ms"] == 50

    def test_unknown_section_ignored(self, monkeypatch):
        from notethreads.config import _apply_env_overrides

        monkeypatch.setenv("NOTETHREADS_NOPE_KEY", "x")
        config = _apply_env_overrides({"trigger": {}})
        assert config == {"trigger": {}}

    def test_get_config_applies_overrides(self, monkeypatch, tmp_path):
        from notethreads.config import get_config

        monkeypatch.setenv("NOTETHREADS_TRIGGER_THRESHOLD", "3")
        config = get_config(start_path=tmp_path)
        assert config["trigger"]["threshold"] == 3
