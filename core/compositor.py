"""Flatten the base photo and its text overlays into one exportable image."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw

from core.geometry import Size
from core.overlays import TextOverlay
from core.photo import BaseImage
from core.text_layout import TextMeasurer

CONTENT_MODES = ("aspect_fit", "aspect_fill", "stretch")

logger = logging.getLogger(__name__)


def _rgba(color: Tuple[int, ...]) -> Tuple[int, int, int, int]:
    if len(color) == 4:
        return tuple(color)
    r, g, b = color
    return r, g, b, 255


class Compositor:
    def __init__(self, measurer: Optional[TextMeasurer] = None,
                 content_mode: str = "aspect_fit",
                 background: Tuple[int, int, int] = (0, 0, 0)):
        if content_mode not in CONTENT_MODES:
            raise ValueError(f"unknown content mode {content_mode!r}, expected one of {CONTENT_MODES}")
        self.measurer = measurer or TextMeasurer()
        self.content_mode = content_mode
        self.background = background

    def _fit_base(self, photo: BaseImage, out_w: int, out_h: int) -> Tuple[Image.Image, Tuple[int, int]]:
        src = photo.to_pil()
        sw, sh = src.size
        if self.content_mode == "stretch":
            return src.resize((out_w, out_h), Image.Resampling.BILINEAR), (0, 0)

        if self.content_mode == "aspect_fill":
            src_aspect = sw / sh
            dst_aspect = out_w / out_h
            if src_aspect > dst_aspect:
                crop_w = int(sh * dst_aspect)
                x = (sw - crop_w) // 2
                rect = (x, 0, x + crop_w, sh)
            else:
                crop_h = int(sw / dst_aspect)
                y = (sh - crop_h) // 2
                rect = (0, y, sw, y + crop_h)
            return src.crop(rect).resize((out_w, out_h), Image.Resampling.BILINEAR), (0, 0)

        scale = min(out_w / sw, out_h / sh)
        w = max(1, round(sw * scale))
        h = max(1, round(sh * scale))
        return src.resize((w, h), Image.Resampling.BILINEAR), ((out_w - w) // 2, (out_h - h) // 2)

    def _draw_overlay(self, out: Image.Image, overlay: TextOverlay, scale: float):
        box_w = max(1, math.ceil(overlay.size.width * scale))
        box_h = max(1, math.ceil(overlay.size.height * scale))
        bg = overlay.style.background
        layer = Image.new("RGBA", (box_w, box_h), _rgba(bg) if bg else (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        font = self.measurer.font(max(1, round(overlay.font_size * scale)))
        line_h = overlay.line_height * scale
        fill = _rgba(overlay.style.color)
        # centred alignment, one row per measured line
        for i, line in enumerate(overlay.lines):
            x = (box_w - font.getlength(line)) / 2
            draw.text((x, i * line_h), line, font=font, fill=fill)

        left, top, _, _ = overlay.bounds
        dest = (max(0, round(left * scale)), max(0, round(top * scale)))
        out.alpha_composite(layer, dest=dest)

    def render(self, base_image: Optional[BaseImage], overlays: Iterable[TextOverlay],
               canvas: Size, scale: float = 1.0) -> Optional[Image.Image]:
        """
        Render the composed canvas.

        The output is ``canvas`` sized (times ``scale``), i.e. display
        resolution rather than the photo's native resolution. Overlays are
        painted oldest first so later ones cover earlier ones.

        Returns:
            RGB image, or None when there is no base image
        """
        if base_image is None:
            return None
        if canvas.width <= 0 or canvas.height <= 0 or scale <= 0:
            raise ValueError(f"cannot render {canvas.width}x{canvas.height} at scale {scale}")

        out_w = max(1, round(canvas.width * scale))
        out_h = max(1, round(canvas.height * scale))
        out = Image.new("RGBA", (out_w, out_h), _rgba(self.background))
        base, offset = self._fit_base(base_image, out_w, out_h)
        out.paste(base, offset)

        count = 0
        for overlay in overlays:
            self._draw_overlay(out, overlay, scale)
            count += 1
        logger.debug("rendered %dx%d with %d overlays", out_w, out_h, count)
        return out.convert("RGB")
