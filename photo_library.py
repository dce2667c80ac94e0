"""Save-to-library and share collaborators for rendered photos."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    ok: bool
    path: Optional[Path] = None
    reason: str = ""


def _unique_path(directory: Path, stem: str, suffix: str) -> Path:
    path = directory / f"{stem}{suffix}"
    n = 1
    while path.exists():
        path = directory / f"{stem}_{n}{suffix}"
        n += 1
    return path


class PhotoLibrary:
    """Stores rendered photos as ``IMG_<timestamp>.jpg`` in ``photo_dir``."""

    def __init__(self, photo_dir: Path, quality: int = 95,
                 clock: Callable[[], datetime] = datetime.now):
        self.photo_dir = Path(photo_dir)
        self.quality = quality
        self.clock = clock

    def _write(self, image: Image.Image) -> Path:
        self.photo_dir.mkdir(parents=True, exist_ok=True)
        stamp = self.clock().strftime("%Y%m%d_%H%M%S")
        path = _unique_path(self.photo_dir, f"IMG_{stamp}", ".jpg")
        image.convert("RGB").save(path, quality=self.quality)
        return path

    async def save(self, image: Image.Image) -> ExportResult:
        loop = asyncio.get_running_loop()
        try:
            path = await loop.run_in_executor(None, self._write, image)
        except (OSError, ValueError) as exc:
            logger.error("save failed: %s", exc)
            return ExportResult(False, reason=str(exc))
        logger.info("photo saved: %s", path)
        return ExportResult(True, path=path)


class ShareSheet:
    """Writes the rendered image to ``share_dir`` for hand-off to other apps."""

    def __init__(self, share_dir: Path, clock: Callable[[], datetime] = datetime.now):
        self.share_dir = Path(share_dir)
        self.clock = clock

    def share(self, image: Image.Image) -> Path:
        self.share_dir.mkdir(parents=True, exist_ok=True)
        stamp = self.clock().strftime("%Y%m%d_%H%M%S")
        path = _unique_path(self.share_dir, f"share_{stamp}", ".png")
        image.save(path)
        logger.info("shared image written to %s", path)
        return path
