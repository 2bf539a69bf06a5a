"""Tests for configuration loading."""

import json

import pytest

from pickercraft.config.constants import DEFAULT_DEBOUNCE_MS
from pickercraft.config.settings import (
    deep_merge,
    get_config_path,
    load_config,
    load_settings,
)
from pickercraft.exceptions import ConfigurationError


def write_config(config_dir, data):
    path = config_dir / "config.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_dicts_merged(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = deep_merge(base, {"a": {"y": 3}})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_lists_replaced(self) -> None:
        merged = deep_merge({"a": [1, 2]}, {"a": [3]})
        assert merged == {"a": [3]}

    def test_base_untouched(self) -> None:
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_file(self, config_dir) -> None:
        settings = load_settings()

        assert settings.debounce_ms == DEFAULT_DEBOUNCE_MS
        assert set(settings.pickers) == {"files", "grep"}
        assert settings.pickers["grep"].located is True
        assert settings.pickers["files"].located is False
        assert settings.preview_commands[0]["cmd"] == "cat"

    def test_config_path_respects_env(self, config_dir) -> None:
        assert get_config_path() == config_dir / "config.json"

    def test_user_picker_added_to_defaults(self, config_dir) -> None:
        write_config(config_dir, {
            "pickers": {
                "todo": {"located": True, "commands": [{"cmd": "rg", "args": ["--vimgrep", "TODO"]}]}
            }
        })

        settings = load_settings()

        assert set(settings.pickers) == {"files", "grep", "todo"}
        assert settings.get_picker("todo").commands == [
            {"cmd": "rg", "args": ["--vimgrep", "TODO"]}
        ]

    def test_user_commands_replace_default_chain(self, config_dir) -> None:
        write_config(config_dir, {"pickers": {"files": {"commands": [{"cmd": "fd"}]}}})

        settings = load_settings()

        assert settings.pickers["files"].commands == [{"cmd": "fd"}]
        assert settings.pickers["files"].located is False

    def test_debounce_from_file_and_env(self, config_dir, monkeypatch) -> None:
        write_config(config_dir, {"debounce_ms": 150})
        assert load_settings().debounce_ms == 150

        monkeypatch.setenv("PICKERCRAFT_DEBOUNCE_MS", "30")
        assert load_settings().debounce_ms == 30

    def test_invalid_debounce(self, config_dir, monkeypatch) -> None:
        monkeypatch.setenv("PICKERCRAFT_DEBOUNCE_MS", "soon")
        with pytest.raises(ConfigurationError, match="Invalid debounce"):
            load_settings()

    def test_invalid_json(self, config_dir) -> None:
        path = write_config(config_dir, "{not json")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config()
        assert exc_info.value.context["path"] == str(path)

    def test_root_must_be_object(self, config_dir) -> None:
        write_config(config_dir, "[1, 2]")
        with pytest.raises(ConfigurationError, match="JSON object"):
            load_settings()

    def test_stage_needs_cmd(self, config_dir) -> None:
        write_config(config_dir, {"pickers": {"bad": {"commands": [{"args": []}]}}})
        with pytest.raises(ConfigurationError, match="stage 1 needs a string 'cmd'"):
            load_settings()

    def test_args_must_be_strings(self, config_dir) -> None:
        write_config(config_dir, {"preview": {"commands": [{"cmd": "cat", "args": [1]}]}})
        with pytest.raises(ConfigurationError, match="list of strings"):
            load_settings()

    def test_empty_chain_rejected(self, config_dir) -> None:
        write_config(config_dir, {"pickers": {"none": {"commands": []}}})
        with pytest.raises(ConfigurationError, match="non-empty list"):
            load_settings()

    def test_unknown_picker(self, config_dir) -> None:
        settings = load_settings()
        with pytest.raises(ConfigurationError) as exc_info:
            settings.get_picker("nope")
        assert exc_info.value.message == "Unknown picker 'nope'"
        assert exc_info.value.context["available"] == "files, grep"
