"""Tests for the desktop entry point wiring."""

from unittest.mock import Mock

from camera_service import FileSource, WebcamSource
from config import EditorConfig
from core.geometry import Size
from core.ui_renderer import BOTTOM_H, TOP_H
from main_desktop import build_editor, make_source, parse_args


class TestEntryPoint:
    def test_parse_args(self):
        args = parse_args(["--image", "pics", "--lang", "de"])

        assert args.image == "pics"
        assert args.lang == "de"
        assert args.config is None

    def test_make_source(self, image_file):
        assert isinstance(make_source(str(image_file)), FileSource)
        assert isinstance(make_source(None), WebcamSource)

    def test_build_editor_uses_config(self, tmp_path):
        cfg = EditorConfig(font_size=24, min_scale=0.25, content_mode="stretch",
                           photo_dir=tmp_path / "p", share_dir=tmp_path / "s", jpeg_quality=80)

        editor = build_editor(cfg, Mock(), make_source(None))

        assert editor.canvas == Size(480, 800 - TOP_H - BOTTOM_H)
        assert editor.overlays.measurer.font_size == 24
        assert editor.overlays.measurer.min_font_size == 6
        assert editor.compositor.content_mode == "stretch"
        assert editor.library.quality == 80
