"""Tests for JSON config loading."""

import json
from pathlib import Path

from config import CONFIG_ENV, EditorConfig, load_editor_config, load_runtime_config


class TestRuntimeConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV, raising=False)

        cfg = load_editor_config()

        assert (cfg.screen_width, cfg.screen_height) == (480, 800)
        assert cfg.font_size == 30
        assert cfg.min_scale == 0.5
        assert cfg.content_mode == "aspect_fit"
        assert cfg.photo_dir == Path("./snapcam_photos")

    def test_user_file_overrides_nested_keys(self, tmp_path):
        user = tmp_path / "user.json"
        user.write_text(json.dumps({"text": {"font_size": 24}, "ui": {"lang": "de"}}))

        raw = load_runtime_config(str(user))
        cfg = EditorConfig.from_dict(raw)

        assert cfg.font_size == 24
        assert cfg.min_scale == 0.5
        assert cfg.lang == "de"
        assert raw["render"]["content_mode"] == "aspect_fit"

    def test_env_var(self, tmp_path, monkeypatch):
        user = tmp_path / "env.json"
        user.write_text(json.dumps({"storage": {"photo_dir": str(tmp_path / "out")}}))
        monkeypatch.setenv(CONFIG_ENV, str(user))

        cfg = load_editor_config()

        assert cfg.photo_dir == tmp_path / "out"

    def test_missing_file_yields_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV, raising=False)
        cfg = load_editor_config(str(tmp_path / "absent.json"))
        assert cfg == EditorConfig.from_dict(load_runtime_config(None))

    def test_broken_file_is_ignored(self, tmp_path, caplog):
        user = tmp_path / "broken.json"
        user.write_text("{not json")

        cfg = load_editor_config(str(user))

        assert cfg.font_size == 30
        assert "ignoring unreadable config" in caplog.text

    def test_from_dict_normalises(self):
        cfg = EditorConfig.from_dict({"text": {"color": [1, 2, 3]}, "logging": {"level": "debug"}})

        assert cfg.text_color == (1, 2, 3)
        assert cfg.log_level == "DEBUG"
        assert cfg.screen_width == 480
