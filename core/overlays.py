"""Text overlays placed on the base photo: creation, drag and hit-testing."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from core.geometry import Point, Size, Vector, clamp
from core.text_layout import TextLayout, TextMeasurer

logger = logging.getLogger(__name__)

Color = Tuple[int, ...]


@dataclass(frozen=True)
class OverlayStyle:
    color: Color = (255, 255, 255)
    background: Optional[Color] = None


@dataclass
class TextOverlay:
    id: int
    text: str
    center: Point
    size: Size
    z: int
    lines: Tuple[str, ...] = ()
    font_size: int = 30
    line_height: int = 0
    style: OverlayStyle = field(default_factory=OverlayStyle)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) in canvas coordinates."""
        half_w = self.size.width / 2
        half_h = self.size.height / 2
        return (self.center.x - half_w, self.center.y - half_h,
                self.center.x + half_w, self.center.y + half_h)

    def contains(self, p: Point) -> bool:
        left, top, right, bottom = self.bounds
        return left <= p.x <= right and top <= p.y <= bottom


def clamp_center(center: Point, size: Size, canvas: Size) -> Point:
    half_w = size.width / 2
    half_h = size.height / 2
    return Point(
        clamp(center.x, half_w, canvas.width - half_w),
        clamp(center.y, half_h, canvas.height - half_h),
    )


def _check_canvas(canvas: Size):
    if canvas.width <= 0 or canvas.height <= 0:
        raise ValueError(f"canvas must be non-empty, got {canvas.width}x{canvas.height}")


class OverlayManager:
    """
    Owns the overlay set of one editing session.

    Overlays render in insertion order. Every committed position keeps the
    overlay's box inside the canvas. Without a base image all operations are
    no-ops returning None.
    """

    def __init__(self, measurer: Optional[TextMeasurer] = None,
                 default_style: Optional[OverlayStyle] = None):
        self.measurer = measurer or TextMeasurer()
        self.default_style = default_style or OverlayStyle()
        self.base_loaded = False
        self._overlays: List[TextOverlay] = []
        self._ids = itertools.count(1)

    @property
    def overlays(self) -> Tuple[TextOverlay, ...]:
        return tuple(self._overlays)

    def __len__(self) -> int:
        return len(self._overlays)

    def reset(self, base_loaded: bool):
        self._overlays.clear()
        self.base_loaded = base_loaded

    def get(self, overlay_id: int) -> Optional[TextOverlay]:
        for ov in self._overlays:
            if ov.id == overlay_id:
                return ov
        return None

    def overlay_at(self, p: Point) -> Optional[TextOverlay]:
        for ov in reversed(self._overlays):
            if ov.contains(p):
                return ov
        return None

    def create_overlay(self, text: str, canvas: Size,
                       style: Optional[OverlayStyle] = None) -> Optional[TextOverlay]:
        if not self.base_loaded:
            logger.debug("create_overlay ignored: no base image")
            return None
        _check_canvas(canvas)
        layout: TextLayout = self.measurer.measure(text, canvas.width, canvas.height)
        overlay = TextOverlay(
            id=next(self._ids),
            text=text,
            center=clamp_center(canvas.center, layout.size, canvas),
            size=layout.size,
            z=len(self._overlays),
            lines=layout.lines,
            font_size=layout.font_size,
            line_height=layout.line_height,
            style=style or self.default_style,
        )
        self._overlays.append(overlay)
        logger.info("overlay %d added (%r, %gx%g)", overlay.id, text,
                    overlay.size.width, overlay.size.height)
        return overlay

    def move_overlay(self, overlay_id: int, delta: Vector, canvas: Size) -> Optional[TextOverlay]:
        """Apply one incremental drag step.

        ``delta`` is the motion since the previous step of the same gesture,
        not since the gesture began. The result is clamped per axis.
        """
        if not self.base_loaded:
            return None
        overlay = self.get(overlay_id)
        if overlay is None:
            logger.debug("move_overlay ignored: unknown id %s", overlay_id)
            return None
        _check_canvas(canvas)
        overlay.center = clamp_center(overlay.center + delta, overlay.size, canvas)
        return overlay
