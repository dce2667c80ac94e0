"""
Photo editing session
=====================

One session = the current base photo, the photo as originally captured and
the text overlays on top. The session drives capture, filters, overlays and
the save/share exits, and reports to the user only through the presenter it
was given.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from camera_service import ImageSource, Permission
from core.compositor import Compositor
from core.geometry import Size, Vector
from core.overlays import OverlayManager, OverlayStyle, TextOverlay
from core.photo import BaseImage
from filters import FilterManager
from photo_library import ExportResult, PhotoLibrary, ShareSheet

PERMISSION_TITLE = "Camera Permission"
PERMISSION_MESSAGE = "App needs access to your camera. Please enable camera access in Settings."
SAVE_OK_TITLE = "Success"
SAVE_OK_MESSAGE = "Photo saved successfully."
ERROR_TITLE = "Error"

logger = logging.getLogger(__name__)


class Presenter:
    """Presentation context for user-facing notifications."""

    def show_alert(self, title: str, message: str):
        raise NotImplementedError

    def present_share(self, path: Path):
        raise NotImplementedError


class PhotoEditor:
    def __init__(self, canvas: Size, presenter: Presenter, source: ImageSource,
                 library: PhotoLibrary, share_sheet: ShareSheet,
                 filters: Optional[FilterManager] = None,
                 overlays: Optional[OverlayManager] = None,
                 compositor: Optional[Compositor] = None,
                 render_scale: float = 1.0):
        if canvas.width <= 0 or canvas.height <= 0:
            raise ValueError(f"canvas must be non-empty, got {canvas.width}x{canvas.height}")
        self.canvas = canvas
        self.presenter = presenter
        self.source = source
        self.library = library
        self.share_sheet = share_sheet
        self.filters = filters if filters is not None else FilterManager()
        self.overlays = overlays if overlays is not None else OverlayManager()
        self.compositor = compositor if compositor is not None else Compositor(self.overlays.measurer)
        self.render_scale = render_scale
        self.original_image: Optional[BaseImage] = None
        self.base_image: Optional[BaseImage] = None
        self.current_filter = "none"

    @property
    def has_photo(self) -> bool:
        return self.base_image is not None

    def reset(self):
        self.original_image = None
        self.base_image = None
        self.current_filter = "none"
        self.overlays.reset(base_loaded=False)

    def load_photo(self, photo: BaseImage):
        self.original_image = photo
        self.base_image = photo
        self.current_filter = "none"
        self.overlays.reset(base_loaded=True)
        logger.info("photo loaded (%dx%d)", photo.width, photo.height)

    async def take_photo(self) -> bool:
        """Start over with a fresh capture. True when a photo was loaded."""
        self.reset()
        if await self.source.request_access() is Permission.DENIED:
            self.presenter.show_alert(PERMISSION_TITLE, PERMISSION_MESSAGE)
            return False
        if not self.source.is_available():
            logger.warning("Device has no camera (%s source unavailable)", self.source.name)
            return False
        result = await self.source.capture()
        if result.failed:
            self.presenter.show_alert(ERROR_TITLE, f"Failed to capture photo. {result.error}")
            return False
        if result.cancelled:
            logger.info("capture cancelled")
            return False
        self.load_photo(result.image)
        return True

    def close(self):
        self.reset()

    def apply_filter(self, filter_id: str) -> bool:
        """
        "none" restores the photo as captured; any other filter transforms the
        current base photo. Overlays are untouched.
        """
        if self.original_image is None:
            return False
        if filter_id == "none":
            self.base_image = self.original_image
        else:
            filtered = self.filters.apply_to_photo(self.base_image, filter_id)
            if filtered is self.base_image:
                return False
            self.base_image = filtered
        self.current_filter = filter_id
        logger.info("filter applied: %s", filter_id)
        return True

    def add_text(self, text: str, style: Optional[OverlayStyle] = None) -> Optional[TextOverlay]:
        return self.overlays.create_overlay(text, self.canvas, style)

    def move_text(self, overlay_id: int, delta: Vector) -> Optional[TextOverlay]:
        return self.overlays.move_overlay(overlay_id, delta, self.canvas)

    def render(self) -> Optional[Image.Image]:
        return self.compositor.render(self.base_image, self.overlays.overlays,
                                      self.canvas, self.render_scale)

    async def save_photo(self) -> Optional[ExportResult]:
        image = self.render()
        if image is None:
            return None
        result = await self.library.save(image)
        if result.ok:
            self.presenter.show_alert(SAVE_OK_TITLE, SAVE_OK_MESSAGE)
        else:
            self.presenter.show_alert(ERROR_TITLE, f"Failed to save photo. {result.reason}")
        return result

    def share_photo(self) -> Optional[Path]:
        image = self.render()
        if image is None:
            return None
        try:
            path = self.share_sheet.share(image)
        except OSError as exc:
            logger.error("share failed: %s", exc)
            self.presenter.show_alert(ERROR_TITLE, f"Failed to share photo. {exc}")
            return None
        self.presenter.present_share(path)
        return path
