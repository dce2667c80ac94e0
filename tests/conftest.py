"""Shared fixtures for the SnapCam test suite."""

from pathlib import Path
from typing import Optional
from unittest.mock import Mock

import numpy as np
import pytest
from PIL import Image

from camera_service import ImageSource
from core.geometry import Size
from core.overlays import OverlayManager
from core.photo import BaseImage
from core.photo_editor import PhotoEditor, Presenter
from core.text_layout import TextLayout, TextMeasurer
from photo_library import PhotoLibrary, ShareSheet


class FixedMeasurer(TextMeasurer):
    """Measurer reporting one fixed box for any text."""

    def __init__(self, size: Size):
        super().__init__()
        self.fixed = size

    def measure(self, text, max_width, max_height=None):
        return TextLayout((text,), self.font_size, int(self.fixed.height), self.fixed)


class StubSource(ImageSource):
    name = "stub"

    def __init__(self, photo: Optional[BaseImage] = None, granted: bool = True, available: bool = True,
                 probe_error: Optional[Exception] = None, grab_error: Optional[Exception] = None):
        super().__init__()
        self.photo = photo
        self.granted = granted
        self.available = available
        self.probe_error = probe_error
        self.grab_error = grab_error
        self.probes = 0

    def is_available(self):
        return self.available

    def _probe_access(self):
        self.probes += 1
        if self.probe_error is not None:
            raise self.probe_error
        return self.granted

    def _grab(self):
        if self.grab_error is not None:
            raise self.grab_error
        return self.photo


def solid_photo(width: int, height: int, rgb=(200, 30, 30)) -> BaseImage:
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[:, :] = rgb
    return BaseImage(arr)


@pytest.fixture
def photo():
    return solid_photo(300, 600)


@pytest.fixture
def presenter():
    return Mock(spec=Presenter)


@pytest.fixture
def make_editor(tmp_path, presenter):
    def _make(source=None, canvas=Size(300, 600), overlays=None):
        return PhotoEditor(
            canvas=canvas,
            presenter=presenter,
            source=source or StubSource(solid_photo(canvas.width, canvas.height)),
            library=PhotoLibrary(tmp_path / "photos"),
            share_sheet=ShareSheet(tmp_path / "shared"),
            overlays=overlays if overlays is not None else OverlayManager(),
        )
    return _make


@pytest.fixture
def image_file(tmp_path) -> Path:
    path = tmp_path / "photo.png"
    Image.new("RGB", (40, 80), (10, 120, 200)).save(path)
    return path
