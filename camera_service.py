"""Photo sources (webcam, image files) behind an async permission + capture API."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Callable, List, Optional

import numpy as np
import pygame
from PIL import Image, ImageOps, UnidentifiedImageError

from core.photo import BaseImage

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".bmp", ".webp", ".tif", ".tiff"}

logger = logging.getLogger(__name__)


class Permission(Enum):
    GRANTED = auto()
    DENIED = auto()


class AuthorizationStatus(Enum):
    NOT_DETERMINED = auto()
    AUTHORIZED = auto()
    DENIED = auto()


@dataclass(frozen=True)
class CaptureResult:
    """A captured photo, a user cancel (no image, no error) or a failure."""

    image: Optional[BaseImage] = None
    error: str = ""

    @property
    def cancelled(self) -> bool:
        return self.image is None and not self.error

    @property
    def failed(self) -> bool:
        return bool(self.error)


CANCELLED = CaptureResult()


@dataclass
class CameraConfig:
    device: Optional[str] = None
    width: int = 1280
    height: int = 720
    warmup_frames: int = 3


@dataclass
class CameraStats:
    capture_count: int = 0
    failed_captures: int = 0


class ImageSource:
    """
    Where new base photos come from.

    ``request_access`` and ``capture`` are coroutines; the blocking device or
    file work runs in the default executor and the result is delivered back
    to the awaiting caller.
    """

    name = "source"

    def __init__(self):
        self.status = AuthorizationStatus.NOT_DETERMINED
        self.stats = CameraStats()

    def is_available(self) -> bool:
        raise NotImplementedError

    def _probe_access(self) -> bool:
        raise NotImplementedError

    def _grab(self) -> Optional[BaseImage]:
        raise NotImplementedError

    async def request_access(self) -> Permission:
        if self.status == AuthorizationStatus.AUTHORIZED:
            return Permission.GRANTED
        loop = asyncio.get_running_loop()
        try:
            granted = await loop.run_in_executor(None, self._probe_access)
        except (OSError, SystemError, pygame.error) as exc:
            logger.error("%s access check failed: %s", self.name, exc)
            granted = False
        self.status = AuthorizationStatus.AUTHORIZED if granted else AuthorizationStatus.DENIED
        logger.info("%s access %s", self.name, "granted" if granted else "denied")
        return Permission.GRANTED if granted else Permission.DENIED

    async def capture(self) -> CaptureResult:
        loop = asyncio.get_running_loop()
        try:
            image = await loop.run_in_executor(None, self._grab)
        except (OSError, SystemError, UnidentifiedImageError, pygame.error) as exc:
            logger.error("%s capture failed: %s", self.name, exc)
            self.stats.failed_captures += 1
            return CaptureResult(error=str(exc) or type(exc).__name__)
        if image is None:
            return CANCELLED
        self.stats.capture_count += 1
        return CaptureResult(image)


class WebcamSource(ImageSource):
    """First (or configured) camera via ``pygame.camera``."""

    name = "webcam"

    def __init__(self, config: Optional[CameraConfig] = None):
        super().__init__()
        self.config = config or CameraConfig()
        self._initialized = False

    def _cameras(self) -> List[str]:
        import pygame.camera

        if not self._initialized:
            pygame.camera.init()
            self._initialized = True
        return list(pygame.camera.list_cameras())

    def _device(self) -> Optional[str]:
        cams = self._cameras()
        if self.config.device is not None:
            return self.config.device if self.config.device in cams else None
        return cams[0] if cams else None

    def _open(self, device: str):
        import pygame.camera

        return pygame.camera.Camera(device, (self.config.width, self.config.height))

    def is_available(self) -> bool:
        try:
            return self._device() is not None
        except (pygame.error, SystemError, OSError) as exc:
            logger.warning("camera enumeration failed: %s", exc)
            return False

    def _probe_access(self) -> bool:
        device = self._device()
        if device is None:
            # nothing to be denied; availability is reported separately
            return True
        cam = self._open(device)
        try:
            cam.start()
        except (pygame.error, SystemError, OSError) as exc:
            logger.warning("camera %s refused: %s", device, exc)
            return False
        cam.stop()
        return True

    def _grab(self) -> Optional[BaseImage]:
        device = self._device()
        if device is None:
            return None
        cam = self._open(device)
        cam.start()
        try:
            for _ in range(self.config.warmup_frames):
                cam.get_image()
            surface = cam.get_image()
        finally:
            cam.stop()
        arr = pygame.surfarray.array3d(surface)
        return BaseImage(np.transpose(arr, (1, 0, 2)))  # (w,h,c) -> (h,w,c)


def load_photo(path: Path) -> BaseImage:
    """Open an image file upright (EXIF orientation applied)."""
    with Image.open(path) as img:
        return BaseImage.from_pil(ImageOps.exif_transpose(img))


class FileSource(ImageSource):
    """
    Photos from disk.

    ``path`` may be a single image or a directory whose images are handed out
    in name order, one per capture. A ``chooser`` returning None models the
    user cancelling the picker.
    """

    name = "file"

    def __init__(self, path: Optional[Path] = None,
                 chooser: Optional[Callable[[], Optional[Path]]] = None):
        super().__init__()
        self.path = Path(path) if path is not None else None
        self.chooser = chooser
        self._next = 0

    def _files(self) -> List[Path]:
        if self.path is None:
            return []
        if self.path.is_dir():
            return sorted(p for p in self.path.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
        return [self.path] if self.path.is_file() else []

    def is_available(self) -> bool:
        return self.chooser is not None or bool(self._files())

    def _probe_access(self) -> bool:
        if self.path is None:
            return True
        return os.access(self.path, os.R_OK)

    def _pick(self) -> Optional[Path]:
        if self.chooser is not None:
            return self.chooser()
        files = self._files()
        if not files:
            return None
        picked = files[self._next % len(files)]
        self._next += 1
        return picked

    def _grab(self) -> Optional[BaseImage]:
        picked = self._pick()
        if picked is None:
            return None
        logger.info("loading photo %s", picked)
        return load_photo(picked)
