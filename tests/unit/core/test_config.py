"""Tests for YAML session configuration."""
import pytest

from librarydb.core.config import AppConfig, KeyBindings, load_config
from librarydb.core.exceptions import ConfigError


class TestKeyBindings:
    """Tests for KeyBindings defaults and overrides."""

    def test_defaults_match_classic_layout(self):
        bindings = KeyBindings()
        assert bindings.home == "h"
        assert bindings.show_books == "s"
        assert bindings.new_book == "b"
        assert bindings.list_articles == "l"
        assert bindings.new_article == "a"
        assert bindings.quit == "q"
        assert bindings.enter_edit == "F2"
        assert bindings.exit_edit == "F12"
        assert bindings.save == "F9"
        assert bindings.update_selected == "ctrl+u"
        assert bindings.delete_selected == "ctrl+d"

    def test_from_dict_keeps_missing_defaults(self):
        bindings = KeyBindings.from_dict({"quit": "x"})
        assert bindings.quit == "x"
        assert bindings.home == "h"

    def test_from_dict_rejects_unknown_names(self):
        with pytest.raises(ConfigError, match="frobnicate"):
            KeyBindings.from_dict({"frobnicate": "f"})


class TestAppConfig:
    """Tests for AppConfig parsing."""

    def test_defaults(self):
        config = AppConfig()
        assert config.tick_interval_ms == 200
        assert config.tick_interval == pytest.approx(0.2)
        assert config.poll_interval == pytest.approx(0.02)
        assert config.queue_size == 64

    def test_from_empty_document(self):
        assert AppConfig.from_dict(None) == AppConfig()
        assert AppConfig.from_dict({}) == AppConfig()

    def test_from_dict_overrides(self):
        config = AppConfig.from_dict(
            {
                "session": {"tick_interval_ms": 500, "queue_size": 8},
                "keybindings": {"save": "F5"},
            }
        )
        assert config.tick_interval == pytest.approx(0.5)
        assert config.queue_size == 8
        assert config.poll_interval_ms == 20
        assert config.keybindings.save == "F5"

    def test_rejects_non_mapping_root(self):
        with pytest.raises(ConfigError):
            AppConfig.from_dict(["session"])

    def test_rejects_non_mapping_section(self):
        with pytest.raises(ConfigError):
            AppConfig.from_dict({"session": "fast"})

    def test_rejects_non_integer_setting(self):
        with pytest.raises(ConfigError, match="Invalid session setting"):
            AppConfig.from_dict({"session": {"tick_interval_ms": "soon"}})

    @pytest.mark.parametrize("setting", ["tick_interval_ms", "poll_interval_ms", "queue_size"])
    def test_rejects_non_positive_setting(self, setting):
        with pytest.raises(ConfigError, match="positive"):
            AppConfig.from_dict({"session": {setting: 0}})


class TestLoadConfig:
    """Tests for load_config."""

    def test_none_path_gives_defaults(self):
        assert load_config(None) == AppConfig()

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == AppConfig()

    def test_loads_yaml_file(self, tmp_path):
        path = tmp_path / "librarydb.yaml"
        path.write_text(
            "session:\n"
            "  tick_interval_ms: 100\n"
            "keybindings:\n"
            "  quit: x\n"
            "  delete_selected: F8\n"
        )

        config = load_config(path)

        assert config.tick_interval_ms == 100
        assert config.keybindings.quit == "x"
        assert config.keybindings.delete_selected == "F8"

    def test_invalid_yaml_raises_config_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("session: [unclosed\n")

        with pytest.raises(ConfigError, match="Cannot parse"):
            load_config(path)
